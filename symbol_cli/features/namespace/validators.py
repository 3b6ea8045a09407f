"""Namespace name validation."""

import re

from symbol_cli.shared.validation import ValidationResult

NAMESPACE_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_\-]*$")
MAX_NAMESPACE_LENGTH = 64
MAX_NAMESPACE_DEPTH = 3


class NamespaceValidator:
    @classmethod
    def validate_name(cls, name: str) -> ValidationResult:
        if not name or not name.strip():
            return ValidationResult(
                is_valid=False, error_message="Namespace name is required"
            )

        normalized = name.strip().lower()

        if len(normalized) > MAX_NAMESPACE_LENGTH:
            return ValidationResult(
                is_valid=False,
                error_message=f"Namespace name exceeds {MAX_NAMESPACE_LENGTH} characters",
            )

        if not NAMESPACE_PATTERN.match(normalized):
            return ValidationResult(
                is_valid=False,
                error_message="Namespace must start with a-z or 0-9 and only contain a-z, 0-9, _, and -",
            )

        return ValidationResult(is_valid=True, normalized_value=normalized)

    @classmethod
    def validate_full_name(cls, full_name: str) -> ValidationResult:
        if not full_name or not full_name.strip():
            return ValidationResult(
                is_valid=False, error_message="Namespace name is required"
            )

        parts = full_name.strip().lower().split(".")
        if len(parts) > MAX_NAMESPACE_DEPTH:
            return ValidationResult(
                is_valid=False,
                error_message="Namespace can have at most 3 levels (root.sub.sub)",
            )

        for part in parts:
            result = cls.validate_name(part)
            if not result.is_valid:
                return result

        return ValidationResult(is_valid=True, normalized_value=".".join(parts))
