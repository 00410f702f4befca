"""Core infrastructure shared by the engine: configuration and caching."""
