"""Errors raised by the interchain token tooling."""


class InterchainTokenError(RuntimeError):
    """Raised when an interchain token operation cannot proceed."""


class ConfigurationError(InterchainTokenError):
    """Raised when required configuration is missing or malformed."""


class UnknownOperationError(InterchainTokenError):
    """Raised when the requested operation name is not recognised."""


class RemoteCallError(InterchainTokenError):
    """Raised when an RPC or contract interaction fails."""


class EstimationError(InterchainTokenError):
    """Raised when the cross-chain gas fee cannot be estimated."""
