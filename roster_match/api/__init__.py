"""HTTP API for the surrounding application."""
