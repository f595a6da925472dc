"""Security helpers: JWT access tokens and password hashing."""
