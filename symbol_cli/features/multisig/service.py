"""Multisig account lookups.

A command queries the multisig state of the account it signs for exactly once;
the result is frozen into a ``SignerMultisigInfo`` for the signer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from symbol_cli.errors import NetworkQueryError
from symbol_cli.features.namespace.service import decode_address
from symbol_cli.shared.logging import get_logger
from symbol_cli.shared.network import NetworkClient, NetworkError
from symbol_cli.transaction import SignerMultisigInfo

logger = get_logger(__name__)


@dataclass
class MultisigAccountInfo:
    """Information about a multisig account."""

    account_address: str
    min_approval: int = 0
    cosignatory_addresses: list[str] = field(default_factory=list)

    @property
    def is_multisig(self) -> bool:
        return len(self.cosignatory_addresses) > 0 or self.min_approval > 0

    def to_signer_multisig_info(self) -> SignerMultisigInfo | None:
        if not self.is_multisig:
            return None
        return SignerMultisigInfo(
            is_multisig=True,
            min_approval=self.min_approval,
            cosignatories=frozenset(self.cosignatory_addresses),
            account_address=self.account_address,
        )


class MultisigService:
    """Reads multisig account state from the network."""

    def __init__(self, network_client: NetworkClient):
        self._network_client = network_client

    @staticmethod
    def _normalize_address(address: str) -> str:
        return address.replace("-", "").strip().upper()

    def get_multisig_account_info(self, address: str) -> MultisigAccountInfo | None:
        """Fetch multisig account information; None when the account is not multisig."""
        normalized_address = self._normalize_address(address)
        try:
            result = self._network_client.get_optional(
                f"/account/{normalized_address}/multisig",
                context="Fetch multisig account info",
            )
        except NetworkError as e:
            logger.error("Failed to fetch multisig info: %s", e.message)
            raise NetworkQueryError(
                f"Could not read the multisig state of {normalized_address}: {e.message}"
            ) from e

        if result is None:
            return None

        multisig_data = result.get("multisig", result)
        if not multisig_data:
            return None

        return MultisigAccountInfo(
            account_address=decode_address(
                multisig_data.get("accountAddress", normalized_address)
            ),
            min_approval=int(multisig_data.get("minApproval", 0)),
            cosignatory_addresses=[
                decode_address(addr)
                for addr in multisig_data.get("cosignatoryAddresses", [])
            ],
        )

    def get_signer_multisig_info(self, address: str) -> SignerMultisigInfo | None:
        info = self.get_multisig_account_info(address)
        signer_info = info.to_signer_multisig_info() if info else None
        logger.info(
            "Multisig state of %s: %s",
            self._normalize_address(address),
            f"min_approval={signer_info.min_approval}, "
            f"cosignatories={len(signer_info.cosignatories)}"
            if signer_info
            else "not multisig",
        )
        return signer_info
