"""Authorization services."""
