"""End-to-end tests of the mosaic address restriction command with a fake node."""

import json
import pytest
from argparse import Namespace
from io import StringIO
from unittest.mock import Mock, patch

from requests.exceptions import ConnectionError, HTTPError
from symbolchain import sc
from symbolchain.CryptoTypes import PrivateKey
from symbolchain.symbol.IdGenerator import generate_namespace_path
from symbolchain.symbol.Network import Address

from symbol_cli.commands.mosaic_address_restriction import MosaicAddressRestrictionCommand
from symbol_cli.errors import (
    AnnouncementRejected,
    ConstructionError,
    DecryptionError,
    MissingRequiredOptionError,
    TransportError,
)

NODE = "http://localhost:3000"
MOSAIC_ID = "0ABCDEF012345678"


class FakeNode:
    """Routes ``requests`` calls made by NetworkClient to canned responses."""

    def __init__(self, alias_address, multisig=None):
        self.alias_address = alias_address
        self.multisig = multisig
        self.announced = []
        self.calls = []
        self.reject_announcements = False
        self.unreachable = False
        self.global_restriction_keys = [1]

    def response(self, status_code, body=None):
        response = Mock(status_code=status_code)
        response.json.return_value = body
        response.text = json.dumps(body)
        response.content = response.text.encode()
        if status_code >= 400:
            response.raise_for_status.side_effect = HTTPError(response=response)
        return response

    def get(self, url, timeout=None, **kwargs):
        path = url[len(NODE):]
        self.calls.append(("GET", path))
        if path.endswith("/multisig"):
            if self.multisig is None:
                return self.response(404, {"code": "ResourceNotFound"})
            return self.response(200, {"multisig": self.multisig})
        if path.startswith("/namespaces/"):
            namespace_id = generate_namespace_path("alias1")[-1]
            if path != f"/namespaces/{namespace_id:016X}":
                return self.response(404, {"code": "ResourceNotFound"})
            return self.response(
                200,
                {
                    "meta": {"active": True},
                    "namespace": {
                        "alias": {"type": 2, "address": self.alias_address.bytes.hex().upper()}
                    },
                },
            )
        if path == "/restrictions/mosaic":
            if kwargs["params"]["entryType"] == 1:
                return self.response(200, {"data": [self.global_restriction_entry()]})
            return self.response(200, {"data": []})
        return self.response(404, {})

    def global_restriction_entry(self):
        return {
            "mosaicRestrictionEntry": {
                "entryType": 1,
                "mosaicId": MOSAIC_ID,
                "restrictions": [
                    {
                        "key": str(key),
                        "restriction": {
                            "referenceMosaicId": "0000000000000000",
                            "restrictionValue": "1",
                            "restrictionType": 1,
                        },
                    }
                    for key in self.global_restriction_keys
                ],
            }
        }

    def put(self, url, timeout=None, data=None, **kwargs):
        path = url[len(NODE):]
        self.calls.append(("PUT", path))
        if self.unreachable:
            raise ConnectionError("connection refused")
        if self.reject_announcements:
            return self.response(409, {"code": "InvalidArgument", "message": "payload invalid"})
        self.announced.append((path, json.loads(data)["payload"]))
        return self.response(202, {"message": "packet 9 was pushed to the network via " + path})

    def post(self, url, timeout=None, json=None, **kwargs):
        self.calls.append(("POST", url[len(NODE):]))
        return self.response(200, [{"group": "confirmed", "hash": json["hashes"][0]}])


def options(**overrides):
    values = dict(
        profile=None,
        password="correct horse battery",
        mosaic_id=MOSAIC_ID,
        target_address="@alias1",
        restriction_key="1",
        new_restriction_value="100",
        max_fee=None,
        max_fee_hash_lock=None,
        multisig_public_key=None,
        no_interactive=True,
    )
    values.update(overrides)
    return Namespace(**values)


def deserialize(payload):
    return sc.TransactionFactory.deserialize(bytes.fromhex(payload))


@pytest.fixture
def target(testnet_facade):
    return testnet_facade.create_account(PrivateKey.random())


@pytest.fixture
def stored_profile(profile_store, testnet_profile):
    profile_store.save(testnet_profile, make_default=True)
    return testnet_profile


@pytest.fixture
def run_command(profile_store, stored_profile, non_interactive):
    def run(node, **overrides):
        stdout = StringIO()
        command = MosaicAddressRestrictionCommand(profile_store, non_interactive, stdout=stdout)
        with patch("symbol_cli.shared.network.requests") as mock_requests, patch(
            "symbol_cli.announce.time"
        ) as mock_time:
            mock_requests.get.side_effect = node.get
            mock_requests.put.side_effect = node.put
            mock_requests.post.side_effect = node.post
            mock_time.time.return_value = 0
            try:
                report = command.execute(options(**overrides))
            finally:
                run.stdout = stdout.getvalue()
        return report

    run.stdout = ""
    return run


class TestSingleSignerScenario:
    @pytest.mark.integration
    def test_resolves_signs_and_announces(self, run_command, stored_profile, target):
        node = FakeNode(target.address)

        report = run_command(node)

        assert report.succeeded
        assert len(node.announced) == 1
        path, payload = node.announced[0]
        assert path == "/transactions"
        tx = deserialize(payload)
        assert tx.mosaic_id.value == int(MOSAIC_ID, 16)
        assert tx.restriction_key == 1
        assert tx.previous_restriction_value == 0xFFFFFFFFFFFFFFFF
        assert tx.new_restriction_value == 100
        assert tx.target_address.bytes == target.address.bytes
        assert tx.fee.value == 200000
        assert str(tx.signer_public_key) == stored_profile.public_key
        assert stored_profile.facade.verify_transaction(tx, tx.signature)
        assert "accepted" in run_command.stdout

    @pytest.mark.integration
    def test_key_without_global_restriction_announces_nothing(self, run_command, target):
        node = FakeNode(target.address)
        node.global_restriction_keys = []

        with pytest.raises(ConstructionError, match="Global restriction is not valid"):
            run_command(node)

        assert not any(method == "PUT" for method, _ in node.calls)

    @pytest.mark.integration
    def test_wrong_password_announces_nothing(self, run_command, target):
        node = FakeNode(target.address)
        with pytest.raises(DecryptionError):
            run_command(node, password="not the password")
        assert node.announced == []

    @pytest.mark.integration
    def test_missing_option_without_prompt(self, run_command, target):
        node = FakeNode(target.address)
        with pytest.raises(MissingRequiredOptionError):
            run_command(node, new_restriction_value=None)
        assert not any(method == "PUT" for method, _ in node.calls)

    @pytest.mark.integration
    def test_rejection_is_reported(self, run_command, target):
        node = FakeNode(target.address)
        node.reject_announcements = True
        with pytest.raises(AnnouncementRejected) as exc_info:
            run_command(node)
        assert "payload invalid" in exc_info.value.message
        assert "rejected" in run_command.stdout

    @pytest.mark.integration
    def test_transport_error_is_not_retried(self, run_command, target):
        node = FakeNode(target.address)
        node.unreachable = True
        with pytest.raises(TransportError):
            run_command(node)
        assert [call for call in node.calls if call[0] == "PUT"] == [("PUT", "/transactions")]


class TestBondedScenario:
    @pytest.mark.integration
    def test_multisig_profile_announces_bonded_aggregate(
        self, run_command, stored_profile, testnet_facade, target
    ):
        cosigners = [testnet_facade.create_account(PrivateKey.random()) for _ in range(2)]
        node = FakeNode(
            target.address,
            multisig={
                "accountAddress": Address(stored_profile.address).bytes.hex().upper(),
                "minApproval": 2,
                "minRemoval": 1,
                "cosignatoryAddresses": [c.address.bytes.hex().upper() for c in cosigners],
                "multisigAddresses": [],
            },
        )

        report = run_command(node, max_fee_hash_lock="50000")

        assert report.succeeded
        assert [path for path, _ in node.announced] == ["/transactions", "/transactions/partial"]
        lock = deserialize(node.announced[0][1])
        bonded = deserialize(node.announced[1][1])
        assert lock.type_ == sc.TransactionType.HASH_LOCK
        assert bonded.type_ == sc.TransactionType.AGGREGATE_BONDED
        assert str(lock.hash) == str(stored_profile.facade.hash_transaction(bonded))
        assert lock.fee.value == 50000
        inner = bonded.transactions[0]
        assert inner.type_ == sc.TransactionType.MOSAIC_ADDRESS_RESTRICTION
        assert inner.new_restriction_value == 100
        assert ("POST", "/transactionStatus") in node.calls
        status_index = node.calls.index(("POST", "/transactionStatus"))
        assert node.calls.index(("PUT", "/transactions/partial")) > status_index
