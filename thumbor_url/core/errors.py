import traceback
from typing import Dict, Any, Optional

from pydantic import ValidationError


class ThumborUrlError(Exception):
    """Base exception class for thumbor-url.

    This provides a standardized way to handle errors with detailed context.
    """
    def __init__(self,
                 message: str,
                 error_code: str = "internal_error",
                 context: Optional[Dict[str, Any]] = None,
                 original_exception: Optional[Exception] = None):
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.original_exception = original_exception
        self.traceback = traceback.format_exc() if original_exception else None

        # Add original exception details to context if available
        if original_exception:
            self.context.update({
                "original_error_type": type(original_exception).__name__,
                "original_error": str(original_exception)
            })

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary, e.g. for logging or API responses."""
        result = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }

        # Include non-sensitive context information
        safe_context = {}
        for key, value in self.context.items():
            if key not in ["password", "token", "secret", "key"] and value is not None:
                safe_context[key] = value

        if safe_context:
            result["details"] = safe_context

        return result


class InvalidEndpoint(ThumborUrlError):
    """Error when the server endpoint is not an absolute URL."""
    def __init__(self, endpoint: str, reason: str, context: Optional[Dict[str, Any]] = None):
        context = context or {}
        context["endpoint"] = endpoint
        super().__init__(
            message=f"Invalid endpoint {endpoint!r}: {reason}",
            error_code="invalid_endpoint",
            context=context
        )


class ConfigurationError(ThumborUrlError):
    """Error for invalid or contradictory transformation options."""
    def __init__(self, message: str, field: Optional[str] = None, context: Optional[Dict[str, Any]] = None,
                 original_exception: Optional[Exception] = None):
        self.field = field
        if field:
            context = context or {}
            context["field"] = field
            message = f"Invalid value for '{field}': {message}"

        super().__init__(
            message=message,
            error_code="configuration_error",
            context=context,
            original_exception=original_exception
        )


class MetadataError(ThumborUrlError):
    """Error when a metadata response cannot be parsed."""
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None,
                 original_exception: Optional[Exception] = None):
        super().__init__(
            message=f"Failed to parse metadata response. {message}",
            error_code="metadata_error",
            context=context,
            original_exception=original_exception
        )


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic ValidationError into a single readable line.

    Args:
        exc: The validation error raised by a model

    Returns:
        The messages of all errors joined with '; '
    """
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        # pydantic prefixes errors raised from validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


def configuration_error(field: str, exc: ValidationError) -> ConfigurationError:
    """Convert a pydantic ValidationError into a ConfigurationError for `field`."""
    return ConfigurationError(
        describe_validation_error(exc),
        field=field,
        original_exception=exc
    )
