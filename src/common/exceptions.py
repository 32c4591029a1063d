class DelayRiskError(Exception):
    """Base exception for all delay-risk engine errors."""
    pass

class PersistenceError(DelayRiskError):
    """Raised when reading or writing the incident blob fails."""

    def __init__(self, operation: str, key: str, message: str = ""):
        self.operation = operation
        self.key = key
        super().__init__(f"{operation} of '{key}' failed: {message}" if message else f"{operation} of '{key}' failed")

class ExternalLookupError(DelayRiskError):
    """Raised by weather/event/feed providers when the upstream lookup fails."""
    pass

class ConfigurationError(DelayRiskError):
    """Raised when configuration is invalid."""
    pass
