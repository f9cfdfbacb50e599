"""Domain errors and failure typing."""


class PipelineError(Exception):
    """Base class for export failures."""

    error_code = "PIPELINE_ERROR"


class ConfigurationError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class TransportError(PipelineError):
    """Raised when the remote API cannot be read."""

    error_code = "TRANSPORT_ERROR"

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class WriteError(PipelineError):
    """Raised when the export file cannot be persisted."""

    error_code = "WRITE_ERROR"
