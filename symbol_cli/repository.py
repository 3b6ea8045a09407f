"""Factory for the network repositories a profile talks to."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from symbol_cli.errors import NetworkQueryError
from symbol_cli.shared.network import NetworkClient, NetworkError

if TYPE_CHECKING:
    from symbol_cli.announce import TransactionRepository
    from symbol_cli.config import CliConfig
    from symbol_cli.features.multisig.service import MultisigService
    from symbol_cli.features.namespace.service import NamespaceService
    from symbol_cli.features.restriction.service import RestrictionMosaicRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkProperties:
    generation_hash: str
    epoch_adjustment: int


def parse_epoch_adjustment(value: str | int) -> int:
    """Node properties report the epoch as e.g. ``"1615853185s"``."""
    raw = str(value).strip().rstrip("s")
    try:
        return int(raw)
    except ValueError:
        raise NetworkQueryError(f"Unexpected epoch adjustment value: {value}") from None


class RepositoryFactory:
    """Creates repositories that share one client configuration."""

    def __init__(self, url: str, config: CliConfig | None = None):
        self.url = url
        self.config = config
        self.network_client = NetworkClient(
            url,
            timeout_config=config.timeout_config if config else None,
            retry_config=config.retry_config if config else None,
        )

    def create_namespace_service(self) -> NamespaceService:
        from symbol_cli.features.namespace.service import NamespaceService

        return NamespaceService(self.network_client)

    def create_multisig_service(self) -> MultisigService:
        from symbol_cli.features.multisig.service import MultisigService

        return MultisigService(self.network_client)

    def create_restriction_mosaic_repository(self) -> RestrictionMosaicRepository:
        from symbol_cli.features.restriction.service import RestrictionMosaicRepository

        return RestrictionMosaicRepository(self.network_client)

    def create_transaction_repository(self) -> TransactionRepository:
        from symbol_cli.announce import TransactionRepository

        return TransactionRepository(self.network_client)

    def fetch_network_properties(self) -> NetworkProperties:
        try:
            node_info = self.network_client.get("/node/info", context="Fetch node info")
            properties = self.network_client.get(
                "/network/properties", context="Fetch network properties"
            )
        except NetworkError as e:
            logger.error("Failed to read network properties from %s: %s", self.url, e.message)
            raise NetworkQueryError(
                f"Could not read network properties from {self.url}: {e.message}"
            ) from e

        generation_hash = node_info.get("networkGenerationHashSeed")
        epoch = properties.get("network", {}).get("epochAdjustment")
        if not generation_hash or epoch is None:
            raise NetworkQueryError(f"Node {self.url} did not report its network properties")

        return NetworkProperties(
            generation_hash=str(generation_hash).upper(),
            epoch_adjustment=parse_epoch_adjustment(epoch),
        )
