"""Pydantic request/response models for the public API."""
