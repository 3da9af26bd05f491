"""Error types raised by the online estimators."""


class ConfigurationError(ValueError):
    """Invalid constructor argument or mismatched input dimensions."""


class UnsupportedOperationError(NotImplementedError):
    """Operation that an estimator deliberately does not provide."""
