"""Command-line entry point for symbol-cli."""

from __future__ import annotations

import argparse
import sys
from typing import Any

from symbol_cli.commands.mosaic_address_restriction import MosaicAddressRestrictionCommand
from symbol_cli.commands.private_key_to_public_key import PrivateKeyToPublicKeyCommand
from symbol_cli.commands.profile import ProfileCreateCommand, ProfileListCommand
from symbol_cli.config import CliConfig
from symbol_cli.errors import SymbolCliError
from symbol_cli.profile import ProfileStore
from symbol_cli.resolvers.base import ExecutionContext
from symbol_cli.shared.logging import (
    get_logger,
    get_user_friendly_error,
    setup_logging,
)

logger = get_logger(__name__)


def _execution_context(args: argparse.Namespace) -> ExecutionContext:
    interactive = not getattr(args, "no_interactive", False) and sys.stdin.isatty()
    return ExecutionContext(interactive=interactive)


def _profile_store() -> ProfileStore:
    return ProfileStore(config=CliConfig.load())


def _mosaic_address_restriction(args: argparse.Namespace) -> int:
    store = _profile_store()
    command = MosaicAddressRestrictionCommand(store, _execution_context(args))
    command.execute(args)
    return 0


def _private_key_to_public_key(args: argparse.Namespace) -> int:
    PrivateKeyToPublicKeyCommand(_execution_context(args)).execute(args)
    return 0


def _profile_create(args: argparse.Namespace) -> int:
    store = _profile_store()
    ProfileCreateCommand(store, _execution_context(args)).execute(args)
    return 0


def _profile_list(args: argparse.Namespace) -> int:
    ProfileListCommand(_profile_store()).execute(args)
    return 0


def _add_interaction_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-interactive",
        action="store_true",
        help="Fail instead of prompting when an option is missing.",
    )


def _add_announce_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--profile", help="Profile to use (defaults to the default profile).")
    parser.add_argument("--password", help="Profile password.")
    parser.add_argument("--max-fee", dest="max_fee", help="Maximum fee (absolute amount).")
    parser.add_argument(
        "--max-fee-hash-lock",
        dest="max_fee_hash_lock",
        help="Maximum fee of the hash lock, when the multisig account needs one.",
    )
    parser.add_argument(
        "--multisig-public-key",
        dest="multisig_public_key",
        help="Public key of the multisig account the transaction is signed for.",
    )
    _add_interaction_arguments(parser)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symbol-cli", description="Symbol command-line wallet."
    )
    subparsers = parser.add_subparsers(dest="command")

    transaction = subparsers.add_parser("transaction", help="Create and announce transactions.")
    transaction_sub = transaction.add_subparsers(dest="transaction_command")

    restriction = transaction_sub.add_parser(
        "mosaicaddressrestriction",
        help="Set a mosaic restriction to a specific address (requires internet).",
    )
    restriction.add_argument(
        "-m", "--mosaic-id", dest="mosaic_id", help="Mosaic identifier or @alias being restricted."
    )
    restriction.add_argument(
        "-a", "--target-address", dest="target_address", help="Address or @alias being restricted."
    )
    restriction.add_argument(
        "-k", "--restriction-key", dest="restriction_key", help="Restriction key."
    )
    restriction.add_argument(
        "-V",
        "--new-restriction-value",
        dest="new_restriction_value",
        help="New restriction value.",
    )
    _add_announce_arguments(restriction)
    restriction.set_defaults(func=_mosaic_address_restriction)

    converter = subparsers.add_parser("converter", help="Key and format converters.")
    converter_sub = converter.add_subparsers(dest="converter_command")
    to_public = converter_sub.add_parser(
        "privatekeytopublickey", help="Private key -> public key converter."
    )
    to_public.add_argument("-p", "--private-key", dest="private_key", help="Private key.")
    to_public.add_argument(
        "-n", "--network", help="Network type (MAIN_NET, TEST_NET, MIJIN, MIJIN_TEST)."
    )
    _add_interaction_arguments(to_public)
    to_public.set_defaults(func=_private_key_to_public_key)

    profile = subparsers.add_parser("profile", help="Manage profiles.")
    profile_sub = profile.add_subparsers(dest="profile_command")
    create = profile_sub.add_parser("create", help="Create a profile.")
    create.add_argument("--name", help="Profile name.")
    create.add_argument("-n", "--network", help="Network type.")
    create.add_argument("-u", "--url", help="Node URL, e.g. http://localhost:3000.")
    create.add_argument("-p", "--private-key", dest="private_key", help="Import this private key instead of generating one.")
    create.add_argument("--password", help="Password used to encrypt the private key.")
    create.add_argument("--max-fee", dest="max_fee", help="Default maximum fee.")
    create.add_argument(
        "--currency-mosaic-id",
        dest="currency_mosaic_id",
        help="Network currency mosaic id (required for MIJIN networks).",
    )
    create.add_argument(
        "--generation-hash",
        dest="generation_hash",
        help="Network generation hash; read from the node when omitted.",
    )
    create.add_argument(
        "--epoch-adjustment",
        dest="epoch_adjustment",
        help="Network epoch in seconds; used with --generation-hash.",
    )
    create.add_argument("--default", action="store_true", help="Make this the default profile.")
    _add_interaction_arguments(create)
    create.set_defaults(func=_profile_create)

    list_cmd = profile_sub.add_parser("list", help="List profiles.")
    list_cmd.set_defaults(func=_profile_list)

    return parser


def main(argv: Any = None) -> int:
    """Program entry point."""
    setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except SymbolCliError as e:
        logger.error("%s failed: %s", args.command, e.message)
        _, suggestion = get_user_friendly_error(e)
        print(f"Error: {e.message}", file=sys.stderr)
        if suggestion:
            print(suggestion, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Aborted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
