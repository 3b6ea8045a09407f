"""Announcement of signed transactions.

Transactions are submitted one at a time, in order. The first transaction that
is not accepted stops the run; whatever follows it is reported as not announced.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, cast

from symbol_cli.shared.logging import get_logger
from symbol_cli.shared.network import NetworkClient, NetworkError
from symbol_cli.transaction import AnnounceMode, SignedTransaction

logger = get_logger(__name__)

HASH_LOCK_TYPE = "hash_lock_transaction_v1"


class AnnouncementStatus(Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class AnnouncementOutcome:
    transaction: SignedTransaction
    status: AnnouncementStatus
    message: str = ""

    @property
    def accepted(self) -> bool:
        return self.status is AnnouncementStatus.ACCEPTED


@dataclass
class AnnouncementReport:
    outcomes: list[AnnouncementOutcome] = field(default_factory=list)
    not_announced: list[SignedTransaction] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.not_announced and all(o.accepted for o in self.outcomes)

    @property
    def failure(self) -> AnnouncementOutcome | None:
        for outcome in self.outcomes:
            if not outcome.accepted:
                return outcome
        return None


def outcome_from_error(
    transaction: SignedTransaction, error: NetworkError
) -> AnnouncementOutcome:
    if error.is_transport_failure:
        return AnnouncementOutcome(
            transaction, AnnouncementStatus.TRANSPORT_ERROR, error.message
        )
    return AnnouncementOutcome(
        transaction,
        AnnouncementStatus.REJECTED,
        error.response_text or error.message,
    )


class TransactionRepository:
    """Announcement and status endpoints of a node."""

    def __init__(self, network_client: NetworkClient):
        self._network_client = network_client
        self._announce_client = network_client.without_retries()

    def announce(self, transaction: SignedTransaction) -> dict[str, Any]:
        return self._announce_client.put(
            transaction.announce_as.endpoint,
            context="Announce transaction",
            data=transaction.request_body,
            headers={"Content-Type": "application/json"},
        )

    def get_transaction_status(self, tx_hash: str) -> dict[str, Any] | None:
        response = self._network_client.post(
            "/transactionStatus",
            context="Check transaction status",
            json={"hashes": [tx_hash.strip().upper()]},
        )
        statuses = cast(
            list[dict[str, Any]], response if isinstance(response, list) else []
        )
        return statuses[0] if statuses else None


class TransactionAnnouncer:
    def __init__(
        self,
        repository: TransactionRepository,
        hash_lock_timeout_seconds: int = 120,
        poll_interval_seconds: int = 5,
    ):
        self.repository = repository
        self.hash_lock_timeout_seconds = hash_lock_timeout_seconds
        self.poll_interval_seconds = poll_interval_seconds

    def wait_for_hash_lock(
        self, hash_lock: SignedTransaction, bonded: SignedTransaction
    ) -> AnnouncementOutcome | None:
        """Blocks until the lock is confirmed; returns the bonded failure otherwise."""
        logger.info("Waiting for hash lock %s to be confirmed", hash_lock.hash)
        deadline = time.time() + self.hash_lock_timeout_seconds

        while time.time() < deadline:
            try:
                status = self.repository.get_transaction_status(hash_lock.hash)
                if status:
                    group = status.get("group", "")
                    if group == "confirmed":
                        return None
                    if group == "failed":
                        return AnnouncementOutcome(
                            bonded,
                            AnnouncementStatus.REJECTED,
                            f"Hash lock failed: {status.get('code', 'unknown')}",
                        )
            except NetworkError:
                pass

            time.sleep(self.poll_interval_seconds)

        return AnnouncementOutcome(
            bonded,
            AnnouncementStatus.TRANSPORT_ERROR,
            f"Hash lock not confirmed within {self.hash_lock_timeout_seconds} seconds",
        )

    def announce(self, transaction: SignedTransaction) -> AnnouncementOutcome:
        try:
            result = self.repository.announce(transaction)
        except NetworkError as e:
            logger.error("Announcement of %s failed: %s", transaction.hash, e.message)
            return outcome_from_error(transaction, e)

        message = result.get("message", "")
        logger.info("Announced %s %s: %s", transaction.type_name, transaction.hash, message)
        return AnnouncementOutcome(transaction, AnnouncementStatus.ACCEPTED, message)

    def announce_all(
        self, transactions: list[SignedTransaction]
    ) -> AnnouncementReport:
        report = AnnouncementReport()
        previous: SignedTransaction | None = None

        for index, transaction in enumerate(transactions):
            outcome = None
            if (
                transaction.announce_as is AnnounceMode.PARTIAL
                and previous is not None
                and previous.type_name == HASH_LOCK_TYPE
            ):
                outcome = self.wait_for_hash_lock(previous, transaction)

            if outcome is None:
                outcome = self.announce(transaction)

            report.outcomes.append(outcome)
            if not outcome.accepted:
                report.not_announced = list(transactions[index + 1 :])
                break
            previous = transaction

        return report
