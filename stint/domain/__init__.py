"""Domain layer for stint: pure models and rules, no I/O."""
