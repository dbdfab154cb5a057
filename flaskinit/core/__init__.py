"""Core workflow: models, services, and use cases."""
