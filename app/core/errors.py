"""Error types shared by the extractor, the API clients and the pipelines.

``NotFound`` and ``InvalidSignature`` are caller mistakes and surface as
4xx responses. Everything else is reported to the caller as a
generic 500 while the detail stays in the server log.
"""

from __future__ import annotations

from typing import Optional


class AssistantError(Exception):
    """Base class for every error raised by this service."""


class NotFound(AssistantError):
    pass


class InvalidSignature(AssistantError):
    pass


class ConfigurationError(AssistantError):
    pass


class UpstreamError(AssistantError):
    def __init__(self, service: str, status_code: Optional[int], body: str) -> None:
        self.service = service
        self.status_code = status_code
        self.body = body
        super().__init__("{} returned {}: {}".format(service, status_code or "no response", body[:500]))


class MalformedModelOutput(AssistantError):
    def __init__(self, message: str, raw_text: str) -> None:
        self.raw_text = raw_text
        super().__init__(message)


class FieldError(AssistantError):
    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class MissingField(FieldError):
    def __init__(self, field: str) -> None:
        super().__init__(field, "Missing required field: {}".format(field))


class WrongType(FieldError):
    def __init__(self, field: str, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(field, "Field {} must be a string, got {}".format(field, type_name))
