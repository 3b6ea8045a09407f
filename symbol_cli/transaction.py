"""Signing of unsigned transactions into announceable payloads.

Three envelopes exist. An ordinary account signs every transaction on its own.
An account acting for a multisig account wraps all transactions into one
aggregate: complete when the initiator alone satisfies ``min_approval``, bonded
otherwise. A bonded aggregate is preceded by the hash lock that funds it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Protocol

from symbolchain import sc
from symbolchain.facade.SymbolFacade import SymbolFacade

from symbol_cli.errors import ConstructionError, MultisigConfigurationError
from symbol_cli.shared.logging import get_logger

logger = get_logger(__name__)

HASH_LOCK_DURATION = 480
HASH_LOCK_AMOUNT = 10_000_000
MAX_INNER_TRANSACTIONS = 100
DEFAULT_DEADLINE_HOURS = 2


def create_deadline(facade: SymbolFacade, hours: int = DEFAULT_DEADLINE_HOURS) -> int:
    return facade.network.from_datetime(
        datetime.now(timezone.utc) + timedelta(hours=hours)
    ).timestamp


class EnvelopeKind(Enum):
    SINGLE_SIGNER = "single_signer"
    AGGREGATE_COMPLETE = "aggregate_complete"
    AGGREGATE_BONDED = "aggregate_bonded"


class AnnounceMode(Enum):
    STANDARD = "/transactions"
    PARTIAL = "/transactions/partial"

    @property
    def endpoint(self) -> str:
        return self.value


def select_envelope(
    is_multisig: bool, min_approval: int, transaction_count: int
) -> EnvelopeKind:
    if transaction_count < 1:
        raise ConstructionError("At least one transaction is required for signing")
    if not is_multisig:
        return EnvelopeKind.SINGLE_SIGNER
    if transaction_count > MAX_INNER_TRANSACTIONS:
        raise ConstructionError(
            f"An aggregate holds at most {MAX_INNER_TRANSACTIONS} transactions"
        )
    if min_approval > 1:
        return EnvelopeKind.AGGREGATE_BONDED
    return EnvelopeKind.AGGREGATE_COMPLETE


@dataclass(frozen=True)
class SignerMultisigInfo:
    is_multisig: bool
    min_approval: int
    cosignatories: frozenset[str] = field(default_factory=frozenset)
    account_address: str = ""


@dataclass(frozen=True)
class UnsignedTransaction:
    """Transaction properties that are not yet bound to a signer.

    The same draft can become a top-level transaction or an embedded one,
    depending on whether it is signed directly or through a multisig account.
    """

    type_name: str
    properties: dict[str, Any]
    deadline: int
    max_fee: int

    def build(self, facade: SymbolFacade, signer_public_key: str) -> sc.Transaction:
        transaction = facade.transaction_factory.create(
            {
                **self.properties,
                "type": self.type_name,
                "signer_public_key": signer_public_key,
                "deadline": self.deadline,
            }
        )
        transaction.fee = sc.Amount(self.max_fee)
        return transaction

    def embed(
        self, facade: SymbolFacade, signer_public_key: str
    ) -> sc.EmbeddedTransaction:
        return facade.transaction_factory.create_embedded(
            {
                **self.properties,
                "type": self.type_name,
                "signer_public_key": signer_public_key,
            }
        )


@dataclass
class TransactionSignatureOptions:
    account: Any
    transactions: list[UnsignedTransaction]
    max_fee: int
    signer_multisig_info: SignerMultisigInfo | None = None
    multisig_public_key: str | None = None
    max_fee_hash_lock: int | None = None


@dataclass(frozen=True)
class SignedTransaction:
    payload: str
    hash: str
    signer_public_key: str
    type_name: str
    announce_as: AnnounceMode = AnnounceMode.STANDARD

    @property
    def request_body(self) -> str:
        return json.dumps({"payload": self.payload})


class CosignatureCollector(Protocol):
    """Supplies cosignatures gathered outside this process for an aggregate."""

    def collect(
        self, aggregate: sc.Transaction, cosignatories: frozenset[str]
    ) -> list[sc.Cosignature]: ...


class TransactionSignatureService:
    def __init__(
        self,
        facade: SymbolFacade,
        currency_mosaic_id: int | None = None,
        cosignature_collector: CosignatureCollector | None = None,
        hash_lock_amount: int = HASH_LOCK_AMOUNT,
        hash_lock_duration: int = HASH_LOCK_DURATION,
    ):
        self.facade = facade
        self.currency_mosaic_id = currency_mosaic_id
        self.cosignature_collector = cosignature_collector
        self.hash_lock_amount = hash_lock_amount
        self.hash_lock_duration = hash_lock_duration

    def _check_multisig(
        self, options: TransactionSignatureOptions
    ) -> SignerMultisigInfo | None:
        info = options.signer_multisig_info
        account_public_key = str(options.account.public_key).upper()
        acting_for = (options.multisig_public_key or "").upper()
        acts_for_other = bool(acting_for) and acting_for != account_public_key

        if info is None or not info.is_multisig:
            if acts_for_other:
                raise MultisigConfigurationError(
                    "Signing for another account requires its multisig information"
                )
            return None

        if not info.cosignatories and info.min_approval >= 1:
            raise MultisigConfigurationError(
                f"Multisig account {info.account_address or acting_for} requires "
                f"{info.min_approval} approval(s) but has no cosignatories"
            )

        if acts_for_other and str(options.account.address) not in info.cosignatories:
            raise MultisigConfigurationError(
                f"Account {options.account.address} is not a cosignatory of "
                f"{info.account_address or acting_for}"
            )
        return info

    def sign_transactions(
        self, options: TransactionSignatureOptions
    ) -> list[SignedTransaction]:
        info = self._check_multisig(options)
        kind = select_envelope(
            info is not None,
            info.min_approval if info else 0,
            len(options.transactions),
        )
        logger.info(
            "Signing %d transaction(s) as %s", len(options.transactions), kind.value
        )

        if kind is EnvelopeKind.SINGLE_SIGNER:
            signer_public_key = str(options.account.public_key)
            return [
                self._sign(
                    options.account,
                    draft.build(self.facade, signer_public_key),
                    draft.type_name,
                )
                for draft in options.transactions
            ]

        aggregate = self._create_aggregate(kind, options)
        cosignatories = info.cosignatories if info else frozenset()
        if kind is EnvelopeKind.AGGREGATE_COMPLETE:
            return [
                self._sign_aggregate(
                    options.account, aggregate, cosignatories, AnnounceMode.STANDARD
                )
            ]

        bonded = self._sign_aggregate(
            options.account, aggregate, cosignatories, AnnounceMode.PARTIAL
        )
        hash_lock = self._create_hash_lock(options, bonded.hash)
        return [
            self._sign(options.account, hash_lock, "hash_lock_transaction_v1"),
            bonded,
        ]

    def _create_aggregate(
        self, kind: EnvelopeKind, options: TransactionSignatureOptions
    ) -> sc.Transaction:
        multisig_public_key = options.multisig_public_key or str(options.account.public_key)
        embedded = [
            draft.embed(self.facade, multisig_public_key) for draft in options.transactions
        ]
        type_name = (
            "aggregate_bonded_transaction_v2"
            if kind is EnvelopeKind.AGGREGATE_BONDED
            else "aggregate_complete_transaction_v2"
        )
        aggregate = self.facade.transaction_factory.create(
            {
                "type": type_name,
                "signer_public_key": str(options.account.public_key),
                "deadline": options.transactions[0].deadline,
                "transactions": embedded,
            }
        )
        transactions_hash = self.facade.hash_embedded_transactions(aggregate.transactions)
        aggregate.transactions_hash = sc.Hash256(transactions_hash.bytes)
        aggregate.fee = sc.Amount(options.max_fee)
        return aggregate

    def _create_hash_lock(
        self, options: TransactionSignatureOptions, aggregate_hash: str
    ) -> sc.Transaction:
        if self.currency_mosaic_id is None:
            raise ConstructionError("A currency mosaic id is required to lock funds")

        lock = self.facade.transaction_factory.create(
            {
                "type": "hash_lock_transaction_v1",
                "signer_public_key": str(options.account.public_key),
                "deadline": options.transactions[0].deadline,
                "mosaic": {
                    "mosaic_id": self.currency_mosaic_id,
                    "amount": self.hash_lock_amount,
                },
                "duration": self.hash_lock_duration,
                "hash": aggregate_hash,
            }
        )
        lock_fee = options.max_fee_hash_lock
        lock.fee = sc.Amount(options.max_fee if lock_fee is None else lock_fee)
        return lock

    def _sign(
        self, account: Any, transaction: sc.Transaction, type_name: str
    ) -> SignedTransaction:
        signature = self.facade.sign_transaction(account.key_pair, transaction)
        self.facade.transaction_factory.attach_signature(transaction, signature)
        return SignedTransaction(
            payload=transaction.serialize().hex().upper(),
            hash=str(self.facade.hash_transaction(transaction)),
            signer_public_key=str(account.public_key),
            type_name=type_name,
        )

    def _sign_aggregate(
        self,
        account: Any,
        aggregate: sc.Transaction,
        cosignatories: frozenset[str],
        announce_as: AnnounceMode,
    ) -> SignedTransaction:
        # the initiator signs before cosignatures are attached
        signature = self.facade.sign_transaction(account.key_pair, aggregate)
        self.facade.transaction_factory.attach_signature(aggregate, signature)

        if self.cosignature_collector is not None:
            cosignatures = self.cosignature_collector.collect(aggregate, cosignatories)
            aggregate.cosignatures.extend(cosignatures)
            logger.info("Attached %d offline cosignature(s)", len(cosignatures))

        type_name = (
            "aggregate_bonded_transaction_v2"
            if announce_as is AnnounceMode.PARTIAL
            else "aggregate_complete_transaction_v2"
        )
        return SignedTransaction(
            payload=aggregate.serialize().hex().upper(),
            hash=str(self.facade.hash_transaction(aggregate)),
            signer_public_key=str(account.public_key),
            type_name=type_name,
            announce_as=announce_as,
        )
