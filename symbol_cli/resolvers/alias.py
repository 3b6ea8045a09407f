"""Resolvers that accept an ``@alias`` and look it up on the network."""

from __future__ import annotations

from typing import Any

from symbol_cli.features.namespace.service import NamespaceService
from symbol_cli.resolvers.base import (
    ExecutionContext,
    OptionSource,
    parse_or_raise,
    resolve_raw_value,
)
from symbol_cli.shared.logging import get_logger
from symbol_cli.shared.validation import AddressValidator, MosaicIdValidator

logger = get_logger(__name__)

ALIAS_PREFIX = "@"


def split_alias(value: str) -> str | None:
    if value.startswith(ALIAS_PREFIX):
        return value[len(ALIAS_PREFIX) :].strip()
    return None


class AddressAliasResolver:
    field_name = "address"

    def __init__(
        self,
        namespace_service: NamespaceService,
        context: ExecutionContext | None = None,
        network: Any = None,
    ):
        self.namespace_service = namespace_service
        self.context = context or ExecutionContext()
        self.network = network

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
            prompt_message or "Enter an address or @alias:",
            self.context,
            secondary_source,
        )
        alias = split_alias(raw)
        if alias is not None:
            address = self.namespace_service.resolve_address_alias(alias)
        else:
            address = raw
        return parse_or_raise(AddressValidator.validate(address, self.network), name)


class MosaicIdAliasResolver:
    field_name = "mosaic_id"

    def __init__(
        self,
        namespace_service: NamespaceService,
        context: ExecutionContext | None = None,
    ):
        self.namespace_service = namespace_service
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
            prompt_message or "Enter the mosaic id or @alias:",
            self.context,
            secondary_source,
        )
        alias = split_alias(raw)
        if alias is not None:
            return self.namespace_service.resolve_mosaic_alias(alias)
        return parse_or_raise(MosaicIdValidator.validate(raw), name)
