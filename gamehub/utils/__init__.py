"""Shared helpers: logging setup and the domain error hierarchy."""
