class VerifierError(Exception):
    """Base exception for the topology verifier."""

    pass


class ConfigurationError(VerifierError):
    """Raised when the verifier configuration is invalid."""

    pass


class ResourceNotFoundError(VerifierError):
    """Raised when a resource required by a verification branch is missing."""

    pass


class AwsApiError(VerifierError):
    """Raised when an underlying AWS API call fails (permissions, network, throttling)."""

    def __init__(self, operation: str, error: Exception):
        self.operation = operation
        self.error = error
        super().__init__(f"{operation} failed: {error}")
