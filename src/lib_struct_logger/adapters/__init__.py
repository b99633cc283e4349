"""Adapters implementing the application ports (renderers, environment settings)."""
