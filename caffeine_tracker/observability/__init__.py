"""Observability helpers: request IDs + structlog contextvars, JSON logs,
and an in-memory metrics snapshot endpoint for local development.
"""
