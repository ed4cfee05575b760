"""Error taxonomy for the simulation engine and the translation gateway."""


class SimulationError(Exception):
    """Base class for every error raised by seq2seq_viz."""


class ValidationError(SimulationError):
    """A request was refused before contacting the gateway (blank input, missing key, busy)."""


class InvariantViolation(SimulationError):
    """Programming defect: the engine reached a state its guards should prevent."""


class GatewayFailure(SimulationError):
    """The translation gateway completed without a usable translation."""


class MissingCredential(GatewayFailure, ValidationError):
    """No usable API key; caught before any request is made."""

    def __init__(self, message: str = "API Key is missing. Set GEMINI_API_KEY to a valid key."):
        super().__init__(message)


class TransportFailure(GatewayFailure):
    def __init__(
        self,
        message: str = "Failed to get translation. Check your API key and network connection.",
    ):
        super().__init__(message)


class ServiceError(GatewayFailure):
    """Non-success response; the remote message is surfaced verbatim."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(GatewayFailure):
    def __init__(self, message: str = "Invalid response structure from API."):
        super().__init__(message)


class EmptyResult(GatewayFailure):
    def __init__(self, message: str = "Received an empty translation."):
        super().__init__(message)
