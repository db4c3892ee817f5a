"""Page pool implementations."""
