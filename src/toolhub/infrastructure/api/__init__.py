"""HTTP API for ToolHub built on FastAPI."""
