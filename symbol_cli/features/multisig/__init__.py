"""Multisig account lookups."""

from symbol_cli.features.multisig.service import MultisigAccountInfo, MultisigService

__all__ = ["MultisigAccountInfo", "MultisigService"]
