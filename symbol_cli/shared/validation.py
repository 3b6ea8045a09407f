"""Input validation utilities for option values."""

from dataclasses import dataclass
from typing import Any

from symbolchain.symbol.Metadata import metadata_generate_key

UINT64_MAX = 0xFFFFFFFFFFFFFFFF
HEX_DIGITS = set("0123456789abcdefABCDEF")


@dataclass
class ValidationResult:
    is_valid: bool
    error_message: str | None = None
    normalized_value: Any = None


def _is_hex(value: str) -> bool:
    return bool(value) and all(c in HEX_DIGITS for c in value)


class AddressValidator:
    MIN_ADDRESS_LENGTH = 39
    MAX_ADDRESS_LENGTH = 40

    @staticmethod
    def validate(value: str, network=None) -> ValidationResult:
        """Checks the raw format and, when a network is given, its checksum and prefix."""
        if not value or not value.strip():
            return ValidationResult(
                is_valid=False,
                error_message="Address is required",
            )

        normalized = value.strip().replace("-", "").upper()

        if len(normalized) < AddressValidator.MIN_ADDRESS_LENGTH:
            return ValidationResult(
                is_valid=False,
                error_message=f"Address too short. Expected {AddressValidator.MIN_ADDRESS_LENGTH}-{AddressValidator.MAX_ADDRESS_LENGTH} characters",
            )

        if len(normalized) > AddressValidator.MAX_ADDRESS_LENGTH:
            return ValidationResult(
                is_valid=False,
                error_message=f"Address too long. Expected {AddressValidator.MIN_ADDRESS_LENGTH}-{AddressValidator.MAX_ADDRESS_LENGTH} characters",
            )

        if not normalized.isalnum():
            return ValidationResult(
                is_valid=False,
                error_message="Address contains invalid characters",
            )

        if network is not None and not network.is_valid_address_string(normalized):
            return ValidationResult(
                is_valid=False,
                error_message=f"Address is not valid for network {network.name}",
            )

        return ValidationResult(
            is_valid=True,
            normalized_value=normalized,
        )


class MosaicIdValidator:
    HEX_LENGTH = 16

    @staticmethod
    def validate(value: str | int) -> ValidationResult:
        if isinstance(value, int):
            if value <= 0 or value > UINT64_MAX:
                return ValidationResult(
                    is_valid=False,
                    error_message="Mosaic ID must be a positive 64-bit integer",
                )
            return ValidationResult(is_valid=True, normalized_value=value)

        if not value or not value.strip():
            return ValidationResult(
                is_valid=False,
                error_message="Mosaic ID is required",
            )

        hex_part = value.strip()
        if hex_part.lower().startswith("0x"):
            hex_part = hex_part[2:]

        if not _is_hex(hex_part):
            return ValidationResult(
                is_valid=False,
                error_message="Mosaic ID must be a valid hexadecimal number",
            )

        if len(hex_part) != MosaicIdValidator.HEX_LENGTH:
            return ValidationResult(
                is_valid=False,
                error_message=f"Mosaic ID must have {MosaicIdValidator.HEX_LENGTH} hexadecimal characters",
            )

        return ValidationResult(
            is_valid=True,
            normalized_value=int(hex_part, 16),
        )


class KeyValidator:
    """Validates 32-byte hex keys (private and public)."""

    KEY_LENGTH = 64

    @staticmethod
    def validate(value: str, label: str = "Key") -> ValidationResult:
        if not value or not value.strip():
            return ValidationResult(is_valid=False, error_message=f"{label} is required")

        normalized = value.strip().upper()
        if len(normalized) != KeyValidator.KEY_LENGTH or not _is_hex(normalized):
            return ValidationResult(
                is_valid=False,
                error_message=f"{label} must be {KeyValidator.KEY_LENGTH} hexadecimal characters",
            )

        return ValidationResult(is_valid=True, normalized_value=normalized)


class UInt64Validator:
    @staticmethod
    def validate(value: str, label: str = "Value") -> ValidationResult:
        if value is None or not str(value).strip():
            return ValidationResult(is_valid=False, error_message=f"{label} is required")

        raw = str(value).strip()
        if not raw.isdigit():
            return ValidationResult(
                is_valid=False,
                error_message=f"{label} must be a non-negative integer",
            )

        number = int(raw)
        if number > UINT64_MAX:
            return ValidationResult(
                is_valid=False,
                error_message=f"{label} exceeds the maximum 64-bit value",
            )

        return ValidationResult(is_valid=True, normalized_value=number)


class RestrictionKeyValidator:
    HEX_LENGTH = 16

    @staticmethod
    def validate(value: str) -> ValidationResult:
        """Accepts a decimal UInt64, a 16-digit hex key or any text to hash into a key."""
        if value is None or not str(value).strip():
            return ValidationResult(
                is_valid=False, error_message="Restriction key is required"
            )

        raw = str(value).strip()
        if raw.isdigit():
            return UInt64Validator.validate(raw, "Restriction key")

        if len(raw) == RestrictionKeyValidator.HEX_LENGTH and _is_hex(raw):
            return ValidationResult(is_valid=True, normalized_value=int(raw, 16))

        return ValidationResult(
            is_valid=True, normalized_value=metadata_generate_key(raw)
        )


class PasswordValidator:
    MIN_LENGTH = 8

    @staticmethod
    def validate(value: str) -> ValidationResult:
        if not value:
            return ValidationResult(is_valid=False, error_message="Password is required")

        if len(value) < PasswordValidator.MIN_LENGTH:
            return ValidationResult(
                is_valid=False,
                error_message=f"Password must have at least {PasswordValidator.MIN_LENGTH} characters",
            )

        return ValidationResult(is_valid=True, normalized_value=value)
