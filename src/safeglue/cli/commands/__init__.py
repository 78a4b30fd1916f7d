"""Top-level safeglue commands (no domain prefix)."""
