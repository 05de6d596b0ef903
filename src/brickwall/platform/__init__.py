"""Platform backends (display and input)."""
