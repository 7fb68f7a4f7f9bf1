"""Foundation utilities shared across the package (structured logging)."""
