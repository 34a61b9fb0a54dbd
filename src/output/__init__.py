"""Writers for the resolved version matrix."""
