"""Shared utilities and cross-cutting concerns (logging)."""
