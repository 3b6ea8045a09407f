"""``transaction mosaicaddressrestriction``: set a mosaic restriction for an address."""

from __future__ import annotations

from typing import Any

from symbol_cli.announce import AnnouncementReport
from symbol_cli.commands.base import AnnounceTransactionsCommand
from symbol_cli.features.restriction.service import MosaicRestrictionTransactionService
from symbol_cli.resolvers.alias import AddressAliasResolver, MosaicIdAliasResolver
from symbol_cli.resolvers.primitives import (
    KeyResolver,
    MaxFeeResolver,
    PasswordResolver,
    RestrictionValueResolver,
)
from symbol_cli.transaction import create_deadline


class MosaicAddressRestrictionCommand(AnnounceTransactionsCommand):
    def execute(self, options: Any) -> AnnouncementReport:
        profile = self.get_profile(options)
        factory = self.repository_factory(profile)
        namespace_service = factory.create_namespace_service()

        password = self.resolved.resolve(PasswordResolver(self.context), options)
        mosaic_id = self.resolved.resolve(
            MosaicIdAliasResolver(namespace_service, self.context), options
        )
        target_address = self.resolved.resolve(
            AddressAliasResolver(namespace_service, self.context, profile.facade.network),
            options,
            prompt_message="Enter the restricted target address or @alias:",
            field_name="target_address",
        )
        restriction_key = self.resolved.resolve(
            KeyResolver(self.context), options, field_name="restriction_key"
        )
        restriction_value = self.resolved.resolve(
            RestrictionValueResolver(self.context), options
        )
        max_fee = self.resolved.resolve(
            MaxFeeResolver(self.context), options, secondary_source=profile
        )
        signer_multisig_info = self.get_signer_multisig_info(options, profile)
        max_fee_hash_lock = self.get_max_fee_hash_lock(
            options, profile, signer_multisig_info, 1
        )

        service = MosaicRestrictionTransactionService(
            factory.create_restriction_mosaic_repository()
        )
        transaction = service.create_mosaic_address_restriction_transaction(
            create_deadline(profile.facade),
            profile.network_type,
            mosaic_id,
            restriction_key,
            target_address,
            restriction_value,
            max_fee,
        )

        signed_transactions = self.sign_transactions(
            profile,
            password,
            [transaction],
            max_fee,
            signer_multisig_info=signer_multisig_info,
            multisig_public_key=self.resolved.get("multisig_public_key"),
            max_fee_hash_lock=max_fee_hash_lock,
        )
        return self.announce_transactions(profile, signed_transactions)
