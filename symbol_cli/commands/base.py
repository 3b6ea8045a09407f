"""Shared flow of commands that sign and announce transactions."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from symbolchain.CryptoTypes import PublicKey

from symbol_cli.announce import AnnouncementReport, AnnouncementStatus, TransactionAnnouncer
from symbol_cli.config import CliConfig
from symbol_cli.errors import AnnouncementRejected, TransportError
from symbol_cli.profile import Profile, ProfileStore
from symbol_cli.repository import RepositoryFactory
from symbol_cli.resolvers.base import ExecutionContext, ResolvedOptions, option_value
from symbol_cli.resolvers.primitives import MaxFeeResolver, PublicKeyResolver
from symbol_cli.shared.logging import get_logger
from symbol_cli.transaction import (
    EnvelopeKind,
    SignedTransaction,
    SignerMultisigInfo,
    TransactionSignatureOptions,
    TransactionSignatureService,
    UnsignedTransaction,
    select_envelope,
)

logger = get_logger(__name__)


class AnnounceTransactionsCommand:
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
        self._repository_factory: RepositoryFactory | None = None

    def echo(self, message: str) -> None:
        print(message, file=self.stdout)

    def get_profile(self, options: Any) -> Profile:
        profile = self.store.load(option_value(options, "profile"))
        logger.info("Using profile '%s' (%s)", profile.name, profile.network_type.name)
        return profile

    def repository_factory(self, profile: Profile) -> RepositoryFactory:
        if self._repository_factory is None:
            self._repository_factory = profile.repository_factory
        return self._repository_factory

    def get_multisig_public_key(self, options: Any) -> str | None:
        if option_value(options, "multisig_public_key") is None:
            return None
        return self.resolved.resolve(
            PublicKeyResolver(self.context), options, field_name="multisig_public_key"
        )

    def get_signer_multisig_info(
        self, options: Any, profile: Profile
    ) -> SignerMultisigInfo | None:
        multisig_public_key = self.get_multisig_public_key(options)
        if multisig_public_key:
            address = str(
                profile.facade.network.public_key_to_address(PublicKey(multisig_public_key))
            )
        else:
            address = profile.address
        service = self.repository_factory(profile).create_multisig_service()
        return service.get_signer_multisig_info(address)

    def get_max_fee_hash_lock(
        self,
        options: Any,
        profile: Profile,
        signer_multisig_info: SignerMultisigInfo | None,
        transaction_count: int,
    ) -> int | None:
        if signer_multisig_info is None:
            return None
        kind = select_envelope(
            signer_multisig_info.is_multisig,
            signer_multisig_info.min_approval,
            transaction_count,
        )
        if kind is not EnvelopeKind.AGGREGATE_BONDED:
            return None
        return self.resolved.resolve(
            MaxFeeResolver(self.context),
            options,
            secondary_source=profile,
            field_name="max_fee_hash_lock",
        )

    def sign_transactions(
        self,
        profile: Profile,
        password: str,
        transactions: list[UnsignedTransaction],
        max_fee: int,
        signer_multisig_info: SignerMultisigInfo | None = None,
        multisig_public_key: str | None = None,
        max_fee_hash_lock: int | None = None,
    ) -> list[SignedTransaction]:
        service = TransactionSignatureService(
            profile.facade,
            currency_mosaic_id=(
                profile.currency_mosaic_id
                if signer_multisig_info and signer_multisig_info.min_approval > 1
                else None
            ),
        )
        with profile.unlock(password) as account:
            return service.sign_transactions(
                TransactionSignatureOptions(
                    account=account,
                    transactions=transactions,
                    max_fee=max_fee,
                    signer_multisig_info=signer_multisig_info,
                    multisig_public_key=multisig_public_key,
                    max_fee_hash_lock=max_fee_hash_lock,
                )
            )

    def announce_transactions(
        self, profile: Profile, signed_transactions: list[SignedTransaction]
    ) -> AnnouncementReport:
        log = logger.with_context(profile=profile.name)
        log.info("Announcing %d transaction(s)", len(signed_transactions))
        announcer = TransactionAnnouncer(
            self.repository_factory(profile).create_transaction_repository(),
            hash_lock_timeout_seconds=self.config.hash_lock_timeout_seconds,
            poll_interval_seconds=self.config.hash_lock_poll_interval_seconds,
        )
        report = announcer.announce_all(signed_transactions)

        for outcome in report.outcomes:
            tx = outcome.transaction
            line = f"{outcome.status.value}: {tx.type_name} {tx.hash}"
            self.echo(f"{line} ({outcome.message})" if outcome.message else line)
        for tx in report.not_announced:
            self.echo(f"not announced: {tx.type_name} {tx.hash}")

        failure = report.failure
        if failure is None:
            return report
        log.warning(
            "Announcement stopped at %s: %s", failure.transaction.hash, failure.status.value
        )
        if failure.status is AnnouncementStatus.REJECTED:
            raise AnnouncementRejected(
                f"Transaction {failure.transaction.hash} was rejected: {failure.message}",
                report,
            )
        raise TransportError(
            f"Transaction {failure.transaction.hash} could not be announced: {failure.message}",
            report,
        )
