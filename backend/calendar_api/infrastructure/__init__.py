"""Infrastructure Layer: logging setup."""
