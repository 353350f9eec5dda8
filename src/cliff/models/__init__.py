"""Pydantic models for search results and parsed pages."""
