import base64
import json
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Iterator

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from symbolchain.CryptoTypes import Hash256, PrivateKey
from symbolchain.facade.SymbolFacade import SymbolFacade
from symbolchain.symbol.Network import Network

from symbol_cli.config import CliConfig, resolve_storage_dir
from symbol_cli.errors import (
    ConstructionError,
    DecryptionError,
    InvalidOptionFormatError,
    ProfileNotFoundError,
    ProfileStoreError,
)
from symbol_cli.repository import RepositoryFactory

logger = logging.getLogger(__name__)

PROFILES_FILENAME = "profiles.json"
PROFILES_VERSION = 1
PBKDF2_ITERATIONS = 390_000
SALT_SIZE = 16


class NetworkType(Enum):
    MAIN_NET = 0x68
    TEST_NET = 0x98
    MIJIN = 0x60
    MIJIN_TEST = 0x90

    @classmethod
    def parse(cls, value: str) -> "NetworkType":
        normalized = value.strip().upper().replace("-", "_")
        aliases = {"MAINNET": "MAIN_NET", "TESTNET": "TEST_NET", "MIJINTEST": "MIJIN_TEST"}
        normalized = aliases.get(normalized.replace("_", ""), normalized)
        try:
            return cls[normalized]
        except KeyError:
            raise InvalidOptionFormatError(
                "network",
                "expected one of " + ", ".join(member.name for member in cls),
            ) from None

    @property
    def sdk_name(self) -> str:
        return self.name.lower().replace("_", "")

    @property
    def default_epoch_adjustment(self) -> int | None:
        return {
            NetworkType.MAIN_NET: 1615853185,
            NetworkType.TEST_NET: 1667250467,
        }.get(self)

    @property
    def default_currency_mosaic_id(self) -> int | None:
        return {
            NetworkType.MAIN_NET: 0x6BED913FA20223F8,
            NetworkType.TEST_NET: 0x72C0212E67A08BCE,
        }.get(self)


def create_facade(
    network_type: NetworkType,
    generation_hash: str | None = None,
    epoch_adjustment: int | None = None,
) -> SymbolFacade:
    """Builds a facade bound to the profile's network, generation hash and epoch.

    Signatures commit to the generation hash, so a profile created against a
    reset testnet must not fall back to the SDK's built-in seed.
    """
    epoch = epoch_adjustment or network_type.default_epoch_adjustment
    if not generation_hash and network_type in (NetworkType.MAIN_NET, NetworkType.TEST_NET):
        return SymbolFacade(network_type.sdk_name)

    if not generation_hash or epoch is None:
        raise ConstructionError(
            f"Profile for {network_type.name} needs a generation hash and an epoch adjustment"
        )

    network = Network(
        network_type.sdk_name,
        network_type.value,
        datetime.fromtimestamp(epoch, tz=timezone.utc),
        Hash256(generation_hash),
    )
    return SymbolFacade(network)


def derive_fernet_key(password: str, salt: bytes) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=PBKDF2_ITERATIONS,
    )
    return base64.urlsafe_b64encode(kdf.derive(password.encode("utf-8")))


def encrypt_private_key(private_key: PrivateKey, password: str, salt: bytes) -> str:
    cipher = Fernet(derive_fernet_key(password, salt))
    return cipher.encrypt(str(private_key).encode()).decode()


@dataclass
class Profile:
    name: str
    network_type: NetworkType
    url: str
    network_generation_hash: str
    address: str
    public_key: str
    encrypted_private_key: str
    salt: str
    epoch_adjustment: int | None = None
    defaults: dict[str, str] = field(default_factory=dict)
    config: CliConfig | None = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        self._facade: SymbolFacade | None = None

    @property
    def facade(self) -> SymbolFacade:
        if self._facade is None:
            self._facade = create_facade(
                self.network_type, self.network_generation_hash, self.epoch_adjustment
            )
        return self._facade

    @property
    def repository_factory(self) -> RepositoryFactory:
        return RepositoryFactory(self.url, self.config)

    @property
    def currency_mosaic_id(self) -> int:
        configured = self.defaults.get("currency_mosaic_id")
        if configured:
            return int(configured, 16)
        default = self.network_type.default_currency_mosaic_id
        if default is None:
            raise ConstructionError(
                f"Profile '{self.name}' has no currency_mosaic_id default for {self.network_type.name}"
            )
        return default

    def lookup(self, field_name: str) -> str | None:
        """Returns the stored value backing an option, if the profile has one."""
        if field_name in ("network", "network_type"):
            return self.network_type.name
        value = self.defaults.get(field_name)
        return str(value) if value is not None else None

    def decrypt(self, password: str):
        try:
            cipher = Fernet(derive_fernet_key(password, bytes.fromhex(self.salt)))
            private_key_hex = cipher.decrypt(self.encrypted_private_key.encode()).decode()
            account = self.facade.create_account(PrivateKey(private_key_hex))
        except (InvalidToken, ValueError):
            logger.warning("Failed to decrypt profile '%s'", self.name)
            raise DecryptionError(
                f"Could not decrypt profile '{self.name}': wrong password"
            ) from None

        if str(account.address) != self.address:
            logger.error("Decrypted key does not match the address of profile '%s'", self.name)
            raise DecryptionError(
                f"Decrypted key does not belong to profile '{self.name}'"
            )
        return account

    @contextmanager
    def unlock(self, password: str) -> Iterator[Any]:
        """Yields the decrypted account for the duration of the block only."""
        account = self.decrypt(password)
        try:
            yield account
        finally:
            del account

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "network_type": self.network_type.name,
            "url": self.url,
            "network_generation_hash": self.network_generation_hash,
            "epoch_adjustment": self.epoch_adjustment,
            "address": self.address,
            "public_key": self.public_key,
            "encrypted_private_key": self.encrypted_private_key,
            "salt": self.salt,
            "defaults": dict(self.defaults),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], config: CliConfig | None = None) -> "Profile":
        return cls(
            name=data["name"],
            network_type=NetworkType[data["network_type"]],
            url=data["url"],
            network_generation_hash=data.get("network_generation_hash", ""),
            epoch_adjustment=data.get("epoch_adjustment"),
            address=data["address"],
            public_key=data["public_key"],
            encrypted_private_key=data["encrypted_private_key"],
            salt=data["salt"],
            defaults=dict(data.get("defaults", {})),
            config=config,
        )

    @classmethod
    def create(
        cls,
        name: str,
        network_type: NetworkType,
        url: str,
        password: str,
        private_key: PrivateKey | None = None,
        network_generation_hash: str = "",
        epoch_adjustment: int | None = None,
        defaults: dict[str, str] | None = None,
        config: CliConfig | None = None,
    ) -> "Profile":
        facade = create_facade(network_type, network_generation_hash, epoch_adjustment)
        account = facade.create_account(private_key or PrivateKey.random())
        salt = os.urandom(SALT_SIZE)
        return cls(
            name=name,
            network_type=network_type,
            url=url,
            network_generation_hash=network_generation_hash,
            epoch_adjustment=epoch_adjustment,
            address=str(account.address),
            public_key=str(account.public_key),
            encrypted_private_key=encrypt_private_key(
                account.key_pair.private_key, password, salt
            ),
            salt=salt.hex(),
            defaults=dict(defaults or {}),
            config=config,
        )


class ProfileStore:
    def __init__(self, storage_dir: str | Path | None = None, config: CliConfig | None = None):
        self.storage_dir = resolve_storage_dir(storage_dir)
        self.profiles_file = self.storage_dir / PROFILES_FILENAME
        self.config = config

    def _read(self) -> dict[str, Any]:
        if not self.profiles_file.exists():
            return {"version": PROFILES_VERSION, "default": None, "profiles": {}}
        try:
            with open(self.profiles_file, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to read profile store %s: %s", self.profiles_file, e)
            raise ProfileStoreError(
                f"Profile store {self.profiles_file} is unreadable: {e}"
            ) from e

        if not isinstance(data, dict):
            raise ProfileStoreError(
                f"Profile store {self.profiles_file} is unreadable: expected a JSON object"
            )
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        with open(self.profiles_file, "w") as f:
            json.dump(data, f, indent=2)

    def names(self) -> list[str]:
        return sorted(self._read().get("profiles", {}))

    def default_name(self) -> str | None:
        return self._read().get("default")

    def load(self, name: str | None = None) -> Profile:
        data = self._read()
        profile_name = name or data.get("default")
        if not profile_name:
            raise ProfileNotFoundError(
                "No profile selected and no default profile configured"
            )

        profile_data = data.get("profiles", {}).get(profile_name)
        if profile_data is None:
            raise ProfileNotFoundError(f"Profile '{profile_name}' does not exist")
        return Profile.from_dict(profile_data, self.config)

    def save(self, profile: Profile, make_default: bool = False) -> None:
        data = self._read()
        profiles = data.setdefault("profiles", {})
        profiles[profile.name] = profile.to_dict()
        if make_default or not data.get("default"):
            data["default"] = profile.name
        self._write(data)
        logger.info("Profile '%s' saved (%s)", profile.name, profile.address)
