"""Shared utilities for symbol-cli."""

from symbol_cli.shared.logging import (
    ContextAdapter,
    LoggingConfig,
    LogLevel,
    get_logger,
    get_user_friendly_error,
    sanitize_dict,
    sanitize_message,
    setup_logging,
)
from symbol_cli.shared.network import (
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    RetryConfig,
    TimeoutConfig,
)
from symbol_cli.shared.validation import (
    AddressValidator,
    KeyValidator,
    MosaicIdValidator,
    RestrictionKeyValidator,
    UInt64Validator,
    ValidationResult,
)

__all__ = [
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
    "RetryConfig",
    "TimeoutConfig",
    "AddressValidator",
    "KeyValidator",
    "MosaicIdValidator",
    "RestrictionKeyValidator",
    "UInt64Validator",
    "ValidationResult",
    "ContextAdapter",
    "LoggingConfig",
    "LogLevel",
    "get_logger",
    "get_user_friendly_error",
    "sanitize_dict",
    "sanitize_message",
    "setup_logging",
]
