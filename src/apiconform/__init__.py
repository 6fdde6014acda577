"""apiconform — grade JSON API responses against declarative field schemas."""

__version__ = "0.1.0-dev"
