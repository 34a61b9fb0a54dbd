"""Tag parsing and version matrix resolution."""
