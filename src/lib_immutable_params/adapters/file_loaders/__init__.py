"""Structured document loaders (TOML, JSON, YAML)."""
