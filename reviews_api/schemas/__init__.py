"""Pydantic schemas for request validation and responses."""
