"""``profile create`` and ``profile list``."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from symbolchain.CryptoTypes import PrivateKey

from symbol_cli.config import CliConfig
from symbol_cli.errors import InvalidOptionFormatError
from symbol_cli.profile import Profile, ProfileStore
from symbol_cli.repository import RepositoryFactory
from symbol_cli.resolvers.base import (
    ExecutionContext,
    ResolvedOptions,
    option_value,
    parse_or_raise,
    resolve_raw_value,
)
from symbol_cli.resolvers.primitives import (
    MaxFeeResolver,
    NetworkResolver,
    PasswordResolver,
    PrivateKeyResolver,
)
from symbol_cli.shared.logging import get_logger
from symbol_cli.shared.validation import KeyValidator, MosaicIdValidator

logger = get_logger(__name__)


class ProfileCreateCommand:
    def __init__(
        self,
        store: ProfileStore,
        context: ExecutionContext | None = None,
        config: CliConfig | None = None,
        stdout: TextIO | None = None,
    ):
        self.store = store
        self.context = context or ExecutionContext()
        self.config = config or store.config or CliConfig()
        self.stdout = stdout or sys.stdout
        self.resolved = ResolvedOptions()

    def _network_properties(self, options: Any, url: str) -> tuple[str, int | None]:
        generation_hash = option_value(options, "generation_hash")
        if generation_hash is None:
            properties = RepositoryFactory(url, self.config).fetch_network_properties()
            return properties.generation_hash, properties.epoch_adjustment

        generation_hash = parse_or_raise(
            KeyValidator.validate(generation_hash, "Generation hash"), "generation_hash"
        )
        epoch = option_value(options, "epoch_adjustment")
        if epoch is not None and not epoch.isdigit():
            raise InvalidOptionFormatError("epoch_adjustment", "expected seconds since 1970")
        return generation_hash, int(epoch) if epoch is not None else None

    def execute(self, options: Any) -> Profile:
        name = resolve_raw_value(options, "name", "Enter a profile name:", self.context)
        if name in self.store.names():
            raise InvalidOptionFormatError("name", f"profile '{name}' already exists")

        network_type = self.resolved.resolve(NetworkResolver(self.context), options)
        url = resolve_raw_value(options, "url", "Enter the node URL:", self.context)
        password = self.resolved.resolve(PasswordResolver(self.context), options)

        private_key = None
        if option_value(options, "private_key") is not None:
            private_key = PrivateKey(
                self.resolved.resolve(PrivateKeyResolver(self.context), options)
            )

        defaults: dict[str, str] = {}
        if option_value(options, "max_fee") is not None:
            defaults["max_fee"] = str(
                self.resolved.resolve(MaxFeeResolver(self.context), options)
            )
        currency = option_value(options, "currency_mosaic_id")
        if currency is not None:
            mosaic_id = parse_or_raise(
                MosaicIdValidator.validate(currency), "currency_mosaic_id"
            )
            defaults["currency_mosaic_id"] = f"{mosaic_id:016X}"

        generation_hash, epoch_adjustment = self._network_properties(options, url)
        profile = Profile.create(
            name=name,
            network_type=network_type,
            url=url,
            password=password,
            private_key=private_key,
            network_generation_hash=generation_hash,
            epoch_adjustment=epoch_adjustment,
            defaults=defaults,
            config=self.config,
        )
        self.store.save(profile, make_default=bool(getattr(options, "default", False)))

        print(f"Profile '{profile.name}' created", file=self.stdout)
        print(f"  network:    {profile.network_type.name}", file=self.stdout)
        print(f"  address:    {profile.address}", file=self.stdout)
        print(f"  public key: {profile.public_key}", file=self.stdout)
        return profile


class ProfileListCommand:
    def __init__(self, store: ProfileStore, stdout: TextIO | None = None):
        self.store = store
        self.stdout = stdout or sys.stdout

    def execute(self, options: Any = None) -> list[Profile]:
        default_name = self.store.default_name()
        profiles = [self.store.load(name) for name in self.store.names()]
        if not profiles:
            print("No profiles found. Create one with 'symbol-cli profile create'.", file=self.stdout)
        for profile in profiles:
            marker = "*" if profile.name == default_name else " "
            print(
                f"{marker} {profile.name:<16} {profile.network_type.name:<10} "
                f"{profile.address}  {profile.url}",
                file=self.stdout,
            )
        return profiles
