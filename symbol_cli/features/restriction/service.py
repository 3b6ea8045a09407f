"""Mosaic address restriction construction.

An address restriction is only valid for a key that the mosaic already has a
global restriction for. The previous restriction value is part of the
transaction, so building one also requires a lookup of the current restriction
entry for the target address.
"""

from __future__ import annotations

import logging
from typing import Any

from symbol_cli.errors import ConstructionError
from symbol_cli.shared.network import NetworkClient, NetworkError
from symbol_cli.shared.validation import UINT64_MAX, AddressValidator
from symbol_cli.transaction import UnsignedTransaction

logger = logging.getLogger(__name__)

MOSAIC_ADDRESS_RESTRICTION_ENTRY = 0
MOSAIC_GLOBAL_RESTRICTION_ENTRY = 1
MOSAIC_ADDRESS_RESTRICTION_TYPE = "mosaic_address_restriction_transaction_v1"


class RestrictionMosaicRepository:
    def __init__(self, network_client: NetworkClient):
        self._network_client = network_client

    @staticmethod
    def _find_restriction(
        items: list[dict[str, Any]], restriction_key: int
    ) -> dict[str, Any] | None:
        for item in items:
            entry = item.get("mosaicRestrictionEntry", item)
            for restriction in entry.get("restrictions", []):
                if int(restriction.get("key", "-1")) == restriction_key:
                    return restriction
        return None

    def search_address_restrictions(
        self, mosaic_id: int, target_address: str
    ) -> list[dict[str, Any]]:
        result = self._network_client.get(
            "/restrictions/mosaic",
            context="Fetch mosaic restrictions",
            params={
                "mosaicId": f"{mosaic_id:016X}",
                "targetAddress": target_address,
                "entryType": MOSAIC_ADDRESS_RESTRICTION_ENTRY,
            },
        )
        return result.get("data", [])

    def search_global_restrictions(self, mosaic_id: int) -> list[dict[str, Any]]:
        result = self._network_client.get(
            "/restrictions/mosaic",
            context="Fetch mosaic global restrictions",
            params={
                "mosaicId": f"{mosaic_id:016X}",
                "entryType": MOSAIC_GLOBAL_RESTRICTION_ENTRY,
            },
        )
        return result.get("data", [])

    def get_global_restriction(
        self, mosaic_id: int, restriction_key: int
    ) -> dict[str, Any] | None:
        """Global restriction of the mosaic for ``restriction_key``, if defined."""
        restriction = self._find_restriction(
            self.search_global_restrictions(mosaic_id), restriction_key
        )
        if restriction is None:
            return None
        return restriction.get("restriction", restriction)

    def get_address_restriction_value(
        self, mosaic_id: int, target_address: str, restriction_key: int
    ) -> int | None:
        """Current value for ``restriction_key``; None when the address has none."""
        restriction = self._find_restriction(
            self.search_address_restrictions(mosaic_id, target_address),
            restriction_key,
        )
        return None if restriction is None else int(restriction["value"])


class MosaicRestrictionTransactionService:
    def __init__(self, restriction_repository: RestrictionMosaicRepository):
        self.restriction_repository = restriction_repository

    def check_global_restriction(self, mosaic_id: int, restriction_key: int) -> None:
        try:
            restriction = self.restriction_repository.get_global_restriction(
                mosaic_id, restriction_key
            )
        except NetworkError as e:
            logger.error("Failed to fetch global restriction: %s", e.message)
            raise ConstructionError(
                f"Could not read the global restrictions of mosaic {mosaic_id:016X}: {e.message}"
            ) from e
        if restriction is None:
            raise ConstructionError(
                f"Global restriction is not valid for restriction key {restriction_key} "
                f"of mosaic {mosaic_id:016X}"
            )

    def get_previous_restriction_value(
        self, mosaic_id: int, restriction_key: int, target_address: str
    ) -> int:
        try:
            value = self.restriction_repository.get_address_restriction_value(
                mosaic_id, target_address, restriction_key
            )
        except NetworkError as e:
            logger.error("Failed to fetch previous restriction value: %s", e.message)
            raise ConstructionError(
                f"Could not read the current restriction of {target_address}: {e.message}"
            ) from e
        return UINT64_MAX if value is None else value

    def create_mosaic_address_restriction_transaction(
        self,
        deadline: int,
        network_type: Any,
        mosaic_id: int,
        restriction_key: int,
        target_address: str,
        restriction_value: int,
        max_fee: int,
    ) -> UnsignedTransaction:
        validation = AddressValidator.validate(target_address)
        if not validation.is_valid:
            raise ConstructionError(
                f"Invalid target address: {validation.error_message}"
            )
        address = validation.normalized_value
        self.check_global_restriction(mosaic_id, restriction_key)

        previous_value = self.get_previous_restriction_value(
            mosaic_id, restriction_key, address
        )
        logger.info(
            "Restricting mosaic %016X for %s on %s: key=%d previous=%d new=%d",
            mosaic_id,
            address,
            getattr(network_type, "name", network_type),
            restriction_key,
            previous_value,
            restriction_value,
        )
        return UnsignedTransaction(
            type_name=MOSAIC_ADDRESS_RESTRICTION_TYPE,
            properties={
                "mosaic_id": mosaic_id,
                "restriction_key": restriction_key,
                "previous_restriction_value": previous_value,
                "new_restriction_value": restriction_value,
                "target_address": address,
            },
            deadline=deadline,
            max_fee=max_fee,
        )
