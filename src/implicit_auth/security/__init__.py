"""Security primitives: provider metadata, key sets, token validation."""
