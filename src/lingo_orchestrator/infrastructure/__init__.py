"""Process and filesystem helpers used by backends."""
