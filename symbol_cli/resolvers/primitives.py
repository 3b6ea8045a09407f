"""Resolvers for options that need no network access."""

from __future__ import annotations

from typing import Any

from symbol_cli.profile import NetworkType
from symbol_cli.resolvers.base import (
    ExecutionContext,
    OptionSource,
    parse_or_raise,
    resolve_raw_value,
)
from symbol_cli.shared.validation import (
    KeyValidator,
    PasswordValidator,
    RestrictionKeyValidator,
    UInt64Validator,
)


class PrivateKeyResolver:
    field_name = "private_key"

    def __init__(self, context: ExecutionContext | None = None):
        self.context = context or ExecutionContext()

    def resolve(
        self,
        options: Any,
        secondary_source: OptionSource | None = None,
        prompt_message: str | None = None,
        field_name: str | None = None,
    ) -> str:
        name = field_name or self.field_name
        raw = resolve_raw_value(
            options,
            name,
            prompt_message or "Enter a private key:",
            self.context,
            secondary_source,
            hidden=True,
        )
        return parse_or_raise(KeyValidator.validate(raw, "Private key"), name)


class PublicKeyResolver:
    field_name = "public_key"

    def __init__(self, context: ExecutionContext | None = None):
        self.context = context or ExecutionContext()

    def resolve(
        self,
        options: Any,
        secondary_source: OptionSource | None = None,
        prompt_message: str | None = None,
        field_name: str | None = None,
    ) -> str:
        name = field_name or self.field_name
        raw = resolve_raw_value(
            options,
            name,
            prompt_message or "Enter a public key:",
            self.context,
            secondary_source,
        )
        return parse_or_raise(KeyValidator.validate(raw, "Public key"), name)


class NetworkResolver:
    field_name = "network"

    def __init__(self, context: ExecutionContext | None = None):
        self.context = context or ExecutionContext()

    def resolve(
        self,
        options: Any,
        secondary_source: OptionSource | None = None,
        prompt_message: str | None = None,
        field_name: str | None = None,
    ) -> NetworkType:
        name = field_name or self.field_name
        raw = resolve_raw_value(
            options,
            name,
            prompt_message or "Enter the network type (MAIN_NET, TEST_NET, MIJIN, MIJIN_TEST):",
            self.context,
            secondary_source,
        )
        return NetworkType.parse(raw)


class KeyResolver:
    """Resolves a UInt64 key; text that is not a number is hashed into one."""

    field_name = "key"

    def __init__(self, context: ExecutionContext | None = None):
        self.context = context or ExecutionContext()

    def resolve(
        self,
        options: Any,
        secondary_source: OptionSource | None = None,
        prompt_message: str | None = None,
        field_name: str | None = None,
    ) -> int:
        name = field_name or self.field_name
        raw = resolve_raw_value(
            options,
            name,
            prompt_message or "Enter the restriction key:",
            self.context,
            secondary_source,
        )
        return parse_or_raise(RestrictionKeyValidator.validate(raw), name)


class RestrictionValueResolver:
    field_name = "new_restriction_value"

    def __init__(self, context: ExecutionContext | None = None):
        self.context = context or ExecutionContext()

    def resolve(
        self,
        options: Any,
        secondary_source: OptionSource | None = None,
        prompt_message: str | None = None,
        field_name: str | None = None,
    ) -> int:
        name = field_name or self.field_name
        raw = resolve_raw_value(
            options,
            name,
            prompt_message or "Enter the new restriction value:",
            self.context,
            secondary_source,
        )
        return parse_or_raise(UInt64Validator.validate(raw, "Restriction value"), name)


class MaxFeeResolver:
    """Absolute max fee in micro-units; also used for ``max_fee_hash_lock``."""

    field_name = "max_fee"

    def __init__(self, context: ExecutionContext | None = None):
        self.context = context or ExecutionContext()

    def resolve(
        self,
        options: Any,
        secondary_source: OptionSource | None = None,
        prompt_message: str | None = None,
        field_name: str | None = None,
    ) -> int:
        name = field_name or self.field_name
        default_prompt = (
            "Enter the maximum fee for the hash lock (absolute amount):"
            if name == "max_fee_hash_lock"
            else "Enter the maximum fee (absolute amount):"
        )
        raw = resolve_raw_value(
            options,
            name,
            prompt_message or default_prompt,
            self.context,
            secondary_source,
        )
        return parse_or_raise(UInt64Validator.validate(raw, "Max fee"), name)


class PasswordResolver:
    """Passwords are never stored, so only the flag or a hidden prompt applies."""

    field_name = "password"

    def __init__(self, context: ExecutionContext | None = None):
        self.context = context or ExecutionContext()

    def resolve(
        self,
        options: Any,
        secondary_source: OptionSource | None = None,
        prompt_message: str | None = None,
        field_name: str | None = None,
    ) -> str:
        name = field_name or self.field_name
        raw = resolve_raw_value(
            options,
            name,
            prompt_message or "Enter your wallet password:",
            self.context,
            hidden=True,
        )
        return parse_or_raise(PasswordValidator.validate(raw), name)
