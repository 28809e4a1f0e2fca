"""Infrastructure layer: HTTP API, authentication and persistence."""
