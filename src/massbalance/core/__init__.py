"""Shared infrastructure: configuration loading, logging, resource paths."""
