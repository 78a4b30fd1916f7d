"""Secret lookup commands (values are never printed)."""
