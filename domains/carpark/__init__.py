"""Car park facility service."""
