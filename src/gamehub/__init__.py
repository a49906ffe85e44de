"""Mini-games hub API."""
