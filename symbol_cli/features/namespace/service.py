"""Namespace alias lookups against a Symbol node."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from symbolchain.symbol.IdGenerator import generate_namespace_path
from symbolchain.symbol.Network import Address

from symbol_cli.errors import AliasResolutionError
from symbol_cli.features.namespace.validators import NamespaceValidator
from symbol_cli.shared.network import NetworkClient, NetworkError

logger = logging.getLogger(__name__)

ALIAS_TYPE_NONE = 0
ALIAS_TYPE_MOSAIC = 1
ALIAS_TYPE_ADDRESS = 2


def decode_address(value: str) -> str:
    """REST returns addresses hex encoded; accept either form."""
    raw = value.strip()
    if len(raw) == 48:
        try:
            return str(Address(bytes.fromhex(raw)))
        except ValueError:
            pass
    return raw.replace("-", "").upper()


@dataclass
class NamespaceInfo:
    namespace_id: int
    full_name: str
    owner_address: str
    active: bool
    alias_type: int
    alias_address: str | None = None
    alias_mosaic_id: int | None = None

    @property
    def has_address_alias(self) -> bool:
        return self.alias_type == ALIAS_TYPE_ADDRESS

    @property
    def has_mosaic_alias(self) -> bool:
        return self.alias_type == ALIAS_TYPE_MOSAIC

    @classmethod
    def from_api_response(
        cls, namespace_id: int, full_name: str, response: dict[str, Any]
    ) -> "NamespaceInfo":
        ns_data = response.get("namespace", response)
        meta = response.get("meta", {})
        alias = ns_data.get("alias", {})
        alias_type = alias.get("type", ALIAS_TYPE_NONE)

        return cls(
            namespace_id=namespace_id,
            full_name=full_name,
            owner_address=decode_address(ns_data.get("ownerAddress", "")),
            active=meta.get("active", True),
            alias_type=alias_type,
            alias_address=(
                decode_address(alias["address"])
                if alias_type == ALIAS_TYPE_ADDRESS and alias.get("address")
                else None
            ),
            alias_mosaic_id=(
                int(alias["mosaicId"], 16)
                if alias_type == ALIAS_TYPE_MOSAIC and alias.get("mosaicId")
                else None
            ),
        )


class NamespaceService:
    def __init__(self, network_client: NetworkClient):
        self.network_client = network_client

    def get_namespace_id(self, full_name: str) -> int:
        return generate_namespace_path(full_name)[-1]

    def fetch_namespace_info(self, full_name: str) -> NamespaceInfo:
        validation = NamespaceValidator.validate_full_name(full_name)
        if not validation.is_valid:
            raise AliasResolutionError(full_name, validation.error_message or "invalid name")

        normalized = validation.normalized_value
        namespace_id = self.get_namespace_id(normalized)
        try:
            response = self.network_client.get_optional(
                f"/namespaces/{namespace_id:016X}",
                context="Fetch namespace info",
            )
        except NetworkError as e:
            logger.error("Failed to fetch namespace %s: %s", normalized, e.message)
            raise AliasResolutionError(normalized, e.message) from e

        if response is None:
            raise AliasResolutionError(normalized, "namespace does not exist")

        info = NamespaceInfo.from_api_response(namespace_id, normalized, response)
        if not info.active:
            raise AliasResolutionError(normalized, "namespace is expired")
        return info

    def resolve_address_alias(self, full_name: str) -> str:
        info = self.fetch_namespace_info(full_name)
        if not info.has_address_alias or not info.alias_address:
            raise AliasResolutionError(info.full_name, "namespace is not linked to an address")
        logger.info("Alias @%s resolved to %s", info.full_name, info.alias_address)
        return info.alias_address

    def resolve_mosaic_alias(self, full_name: str) -> int:
        info = self.fetch_namespace_info(full_name)
        if not info.has_mosaic_alias or info.alias_mosaic_id is None:
            raise AliasResolutionError(info.full_name, "namespace is not linked to a mosaic")
        logger.info("Alias @%s resolved to mosaic %016X", info.full_name, info.alias_mosaic_id)
        return info.alias_mosaic_id
