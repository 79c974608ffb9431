"""Security utilities."""
