"""symbol-cli - a command-line wallet for Symbol networks.

This package is organized as follows:
- resolvers: option values from flags, profile defaults and prompts
- transaction: signing, including multisig aggregates and hash locks
- announce: ordered announcement with per-transaction outcomes
- features.namespace / features.multisig / features.restriction: node lookups
- commands: the user-invoked commands wiring the pieces together
- shared: network client, logging and validation
"""

from symbol_cli.errors import SymbolCliError
from symbol_cli.transaction import (
    EnvelopeKind,
    SignedTransaction,
    SignerMultisigInfo,
    TransactionSignatureOptions,
    TransactionSignatureService,
    UnsignedTransaction,
    select_envelope,
)
from symbol_cli.profile import NetworkType, Profile, ProfileStore

__version__ = "0.1.0"
__all__ = [
    "SymbolCliError",
    "EnvelopeKind",
    "SignedTransaction",
    "SignerMultisigInfo",
    "TransactionSignatureOptions",
    "TransactionSignatureService",
    "UnsignedTransaction",
    "select_envelope",
    "NetworkType",
    "Profile",
    "ProfileStore",
]
