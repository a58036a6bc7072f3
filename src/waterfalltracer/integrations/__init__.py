"""Adapters for third-party tracers."""
