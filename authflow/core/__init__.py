"""Core: configuration, lifespan, exception handlers."""
