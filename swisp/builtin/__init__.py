"""Builtin operations registered into the global environment."""
