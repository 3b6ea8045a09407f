"""``converter privatekeytopublickey``: print the public key of a private key."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from symbolchain.CryptoTypes import PrivateKey
from symbolchain.symbol.KeyPair import KeyPair

from symbol_cli.resolvers.base import ExecutionContext, ResolvedOptions
from symbol_cli.resolvers.primitives import NetworkResolver, PrivateKeyResolver
from symbol_cli.shared.logging import get_logger

logger = get_logger(__name__)


class PrivateKeyToPublicKeyCommand:
    def __init__(self, context: ExecutionContext | None = None, stdout: TextIO | None = None):
        self.context = context or ExecutionContext()
        self.stdout = stdout or sys.stdout
        self.resolved = ResolvedOptions()

    def execute(self, options: Any) -> str:
        private_key = self.resolved.resolve(PrivateKeyResolver(self.context), options)
        network_type = self.resolved.resolve(NetworkResolver(self.context), options)
        public_key = str(KeyPair(PrivateKey(private_key)).public_key)
        logger.info("Derived public key for %s", network_type.name)
        print(public_key, file=self.stdout)
        return public_key
