"""Tests for multisig account lookups."""

import pytest
from unittest.mock import MagicMock

from symbolchain.CryptoTypes import PrivateKey

from symbol_cli.errors import NetworkQueryError
from symbol_cli.features.multisig.service import MultisigAccountInfo, MultisigService
from symbol_cli.shared.network import NetworkClient, NetworkError, NetworkErrorType


@pytest.fixture
def accounts(testnet_facade):
    return [testnet_facade.create_account(PrivateKey.random()) for _ in range(3)]


@pytest.fixture
def network_client():
    return MagicMock(spec=NetworkClient)


@pytest.fixture
def multisig_service(network_client):
    return MultisigService(network_client)


def encoded(account):
    return account.address.bytes.hex().upper()


class TestMultisigAccountInfo:
    @pytest.mark.unit
    def test_is_multisig_when_cosigners_exist(self):
        info = MultisigAccountInfo(
            account_address="TEST_ADDR",
            min_approval=2,
            cosignatory_addresses=["COSIGNER1", "COSIGNER2"],
        )
        assert info.is_multisig is True

    @pytest.mark.unit
    def test_plain_account_is_not_multisig(self):
        info = MultisigAccountInfo(account_address="TEST_ADDR")
        assert info.is_multisig is False
        assert info.to_signer_multisig_info() is None

    @pytest.mark.unit
    def test_to_signer_multisig_info(self):
        info = MultisigAccountInfo(
            account_address="TEST_ADDR",
            min_approval=2,
            cosignatory_addresses=["A", "B"],
        )
        signer_info = info.to_signer_multisig_info()
        assert signer_info.is_multisig
        assert signer_info.min_approval == 2
        assert signer_info.cosignatories == frozenset({"A", "B"})


class TestGetMultisigAccountInfo:
    @pytest.mark.unit
    def test_decodes_hex_addresses(self, multisig_service, network_client, accounts):
        multisig, first, second = accounts
        network_client.get_optional.return_value = {
            "multisig": {
                "version": 1,
                "accountAddress": encoded(multisig),
                "minApproval": 2,
                "minRemoval": 1,
                "cosignatoryAddresses": [encoded(first), encoded(second)],
                "multisigAddresses": [],
            }
        }

        info = multisig_service.get_multisig_account_info(str(multisig.address))

        network_client.get_optional.assert_called_once()
        assert network_client.get_optional.call_args[0][0] == f"/account/{multisig.address}/multisig"
        assert info.account_address == str(multisig.address)
        assert info.cosignatory_addresses == [str(first.address), str(second.address)]
        assert info.min_approval == 2

    @pytest.mark.unit
    def test_unknown_account_is_not_multisig(self, multisig_service, network_client, accounts):
        network_client.get_optional.return_value = None
        assert multisig_service.get_signer_multisig_info(str(accounts[0].address)) is None

    @pytest.mark.unit
    def test_network_failure_raises_query_error(self, multisig_service, network_client):
        network_client.get_optional.side_effect = NetworkError(
            error_type=NetworkErrorType.CONNECTION_ERROR,
            message="Cannot connect to node",
        )
        with pytest.raises(NetworkQueryError):
            multisig_service.get_multisig_account_info("TADDRESS")
