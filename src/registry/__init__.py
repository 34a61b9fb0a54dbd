"""Remote tag catalog clients."""
