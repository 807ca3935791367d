"""Middleware and exception handlers package."""
