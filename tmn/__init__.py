"""Query parsing, request and response schemas, and services for a building mapping backend."""

__version__ = "0.1.0"