"""Normalize OpenAPI/Swagger documents into typed operations."""
