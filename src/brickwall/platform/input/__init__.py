"""Input backends."""
