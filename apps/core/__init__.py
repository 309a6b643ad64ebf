"""
Core app for the LCDB content backend.

Provides the shared base model, error envelope, request-id middleware,
observability helpers and auth endpoints.
"""
