"""Pydantic schemas: the API contract."""
