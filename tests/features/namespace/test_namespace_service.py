"""Tests for namespace alias resolution."""

import pytest
from unittest.mock import MagicMock

from symbolchain.CryptoTypes import PrivateKey
from symbolchain.symbol.IdGenerator import generate_namespace_path

from symbol_cli.errors import AliasResolutionError
from symbol_cli.features.namespace.service import (
    ALIAS_TYPE_ADDRESS,
    ALIAS_TYPE_MOSAIC,
    NamespaceService,
    decode_address,
)
from symbol_cli.shared.network import NetworkClient, NetworkError, NetworkErrorType


@pytest.fixture
def network_client():
    return MagicMock(spec=NetworkClient)


@pytest.fixture
def namespace_service(network_client):
    return NamespaceService(network_client)


def namespace_response(alias, active=True):
    return {
        "meta": {"active": active, "index": 0},
        "namespace": {"ownerAddress": "", "alias": alias},
    }


class TestDecodeAddress:
    @pytest.mark.unit
    def test_hex_encoded(self, testnet_account):
        raw = testnet_account.address.bytes.hex().upper()
        assert decode_address(raw) == str(testnet_account.address)

    @pytest.mark.unit
    def test_plain_address_normalized(self, testnet_account):
        address = str(testnet_account.address)
        assert decode_address(address.lower()) == address


class TestResolveAddressAlias:
    @pytest.mark.unit
    def test_linked_address(self, namespace_service, network_client, testnet_account):
        network_client.get_optional.return_value = namespace_response(
            {
                "type": ALIAS_TYPE_ADDRESS,
                "address": testnet_account.address.bytes.hex().upper(),
            }
        )

        address = namespace_service.resolve_address_alias("Alias1")

        namespace_id = generate_namespace_path("alias1")[-1]
        network_client.get_optional.assert_called_once()
        assert network_client.get_optional.call_args[0][0] == f"/namespaces/{namespace_id:016X}"
        assert address == str(testnet_account.address)

    @pytest.mark.unit
    def test_unknown_namespace(self, namespace_service, network_client):
        network_client.get_optional.return_value = None
        with pytest.raises(AliasResolutionError, match="does not exist"):
            namespace_service.resolve_address_alias("missing")

    @pytest.mark.unit
    def test_expired_namespace(self, namespace_service, network_client):
        network_client.get_optional.return_value = namespace_response(
            {"type": ALIAS_TYPE_ADDRESS, "address": "00"}, active=False
        )
        with pytest.raises(AliasResolutionError, match="expired"):
            namespace_service.resolve_address_alias("old")

    @pytest.mark.unit
    def test_mosaic_alias_is_not_an_address(self, namespace_service, network_client):
        network_client.get_optional.return_value = namespace_response(
            {"type": ALIAS_TYPE_MOSAIC, "mosaicId": "72C0212E67A08BCE"}
        )
        with pytest.raises(AliasResolutionError):
            namespace_service.resolve_address_alias("symbol.xym")

    @pytest.mark.unit
    def test_invalid_name_skips_network(self, namespace_service, network_client):
        with pytest.raises(AliasResolutionError):
            namespace_service.resolve_address_alias("a.b.c.d")
        network_client.get_optional.assert_not_called()

    @pytest.mark.unit
    def test_network_failure(self, namespace_service, network_client):
        network_client.get_optional.side_effect = NetworkError(
            error_type=NetworkErrorType.TIMEOUT, message="Connection timeout"
        )
        with pytest.raises(AliasResolutionError):
            namespace_service.resolve_address_alias("alias1")


class TestResolveMosaicAlias:
    @pytest.mark.unit
    def test_linked_mosaic(self, namespace_service, network_client):
        network_client.get_optional.return_value = namespace_response(
            {"type": ALIAS_TYPE_MOSAIC, "mosaicId": "72C0212E67A08BCE"}
        )
        assert namespace_service.resolve_mosaic_alias("symbol.xym") == 0x72C0212E67A08BCE
