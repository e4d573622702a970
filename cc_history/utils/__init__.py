"""Shared helpers: logging, log discovery and pricing."""
