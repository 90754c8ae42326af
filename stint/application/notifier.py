"""Observer registry for domain events."""

import logging
from collections.abc import Callable

from stint.domain.shared.events import DomainEvent

logger = logging.getLogger(__name__)

Observer = Callable[[DomainEvent], None]


class ChangeNotifier:
    """Fan out domain events to subscribed observers.

    Observers are called synchronously in subscription order. An observer
    that raises is logged and skipped; the remaining observers still run.
    """

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer and return a function that unregisters it."""
        if observer not in self._observers:
            self._observers.append(observer)
        return lambda: self.unsubscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def publish(self, event: DomainEvent) -> None:
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:
                logger.exception(f"Observer failed handling {type(event).__name__}")
