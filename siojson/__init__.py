"""JSON values with binary payloads, typed object wrappers and JSON HTTP requests."""

__version__ = "0.1.0"
__all__ = ["codec", "model", "request", "library"]