"""User-invoked commands."""
