"""Option resolvers: flag first, then profile, then an interactive prompt."""

from symbol_cli.resolvers.base import (
    ConsolePrompter,
    ExecutionContext,
    ResolvedOptions,
    Resolver,
    resolve_raw_value,
)
from symbol_cli.resolvers.primitives import (
    KeyResolver,
    MaxFeeResolver,
    NetworkResolver,
    PasswordResolver,
    PrivateKeyResolver,
    PublicKeyResolver,
    RestrictionValueResolver,
)
from symbol_cli.resolvers.alias import AddressAliasResolver, MosaicIdAliasResolver

__all__ = [
    "ConsolePrompter",
    "ExecutionContext",
    "ResolvedOptions",
    "Resolver",
    "resolve_raw_value",
    "KeyResolver",
    "MaxFeeResolver",
    "NetworkResolver",
    "PasswordResolver",
    "PrivateKeyResolver",
    "PublicKeyResolver",
    "RestrictionValueResolver",
    "AddressAliasResolver",
    "MosaicIdAliasResolver",
]
