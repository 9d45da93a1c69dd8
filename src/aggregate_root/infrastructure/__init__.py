"""Event store interface and bundled implementations."""
