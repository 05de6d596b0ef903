"""Display backends."""
