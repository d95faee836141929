"""Error taxonomy for the router.

Every error raised by the dispatchers and the preference store derives from
``RouterError``. The HTTP layer maps ``status_code`` onto the response and
puts ``str(error)`` in the envelope's ``message`` field.
"""


class RouterError(Exception):
    """Base class for all router errors."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RouterError):
    """Malformed or incomplete caller input."""

    status_code = 400
    error = "Invalid request"


class NotFound(RouterError):
    """Requested record does not exist."""

    status_code = 404
    error = "Not found"


class UnsupportedModel(RouterError):
    """Selector is not one of the known chat providers."""

    def __init__(self, model: object):
        super().__init__(f"Unsupported AI model: {model}")
        self.model = model


class ProviderNotConfigured(RouterError):
    """Provider credential is absent, so the provider is disabled."""

    def __init__(self, provider: str):
        super().__init__(f"{provider} API key not configured")
        self.provider = provider


class ProviderError(RouterError):
    """Upstream provider call failed or reported an error."""

    def __init__(self, provider: str, message: str, status_code: int | None = None):
        super().__init__(message)
        self.provider = provider
        self.upstream_status = status_code

    def __str__(self) -> str:
        if self.upstream_status is not None:
            return f"{self.provider} returned {self.upstream_status}: {self.message}"
        return f"{self.provider}: {self.message}"


class ProviderTimeout(ProviderError):
    """Upstream provider did not answer within the request timeout."""

    def __init__(self, provider: str, timeout: float):
        super().__init__(provider, f"request timed out after {timeout:g}s")
        self.timeout = timeout


class EmptyResponse(ProviderError):
    """Upstream provider answered without usable content."""

    def __init__(self, provider: str, message: str = "returned empty response"):
        super().__init__(provider, message)


class StorageError(RouterError):
    """Preference backend failure."""
