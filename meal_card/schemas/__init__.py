"""Pydantic schemas exchanged with UI collaborators."""
