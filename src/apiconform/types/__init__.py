"""Foundational types shared across apiconform modules."""

from apiconform.types.base import Assertion, RequestLogEntry, RequestMeta

__all__ = ["Assertion", "RequestLogEntry", "RequestMeta"]
