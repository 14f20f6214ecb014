"""Presentation layer - HTTP error rendering (FastAPI)."""
