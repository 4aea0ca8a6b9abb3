"""Core configuration, security primitives and error types."""
