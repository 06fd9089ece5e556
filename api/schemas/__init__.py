"""
API Schemas - Pydantic models for request/response validation

These schemas define the contract between the API and clients.
Separate from the domain models in movie_catalog.models.
"""
