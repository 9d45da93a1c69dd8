"""Core primitives: errors, configuration, identifiers."""
