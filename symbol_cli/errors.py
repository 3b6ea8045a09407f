"""Error taxonomy for symbol-cli.

Every error carries a message that is safe to print: none of them may embed a
private key or a password.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from symbol_cli.announce import AnnouncementReport


class SymbolCliError(Exception):
    """Base class for errors that terminate a command with a readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class MissingRequiredOptionError(SymbolCliError):
    def __init__(self, field_name: str):
        super().__init__(
            f"Missing required option '{field_name}' and interactive input is disabled"
        )
        self.field_name = field_name


class InvalidOptionFormatError(SymbolCliError):
    def __init__(self, field_name: str, reason: str):
        super().__init__(f"Invalid value for '{field_name}': {reason}")
        self.field_name = field_name
        self.reason = reason


class AliasResolutionError(SymbolCliError):
    def __init__(self, alias: str, reason: str):
        super().__init__(f"Could not resolve alias '@{alias}': {reason}")
        self.alias = alias


class ProfileNotFoundError(SymbolCliError):
    pass


class ProfileStoreError(SymbolCliError):
    pass


class DecryptionError(SymbolCliError):
    pass


class MultisigConfigurationError(SymbolCliError):
    pass


class NetworkQueryError(SymbolCliError):
    pass


class ConstructionError(SymbolCliError):
    pass


class AnnouncementFailure(SymbolCliError):
    """Raised after announcing when a transaction did not get accepted."""

    def __init__(self, message: str, report: "AnnouncementReport"):
        super().__init__(message)
        self.report = report


class AnnouncementRejected(AnnouncementFailure):
    pass


class TransportError(AnnouncementFailure):
    pass
