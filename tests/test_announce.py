"""Tests for ordered announcement and outcome reporting."""

import pytest
from unittest.mock import MagicMock, call, patch

from symbol_cli.announce import (
    AnnouncementStatus,
    TransactionAnnouncer,
    TransactionRepository,
)
from symbol_cli.shared.network import NetworkClient, NetworkError, NetworkErrorType
from symbol_cli.transaction import AnnounceMode, SignedTransaction


def signed(index, type_name="transfer_transaction_v1", announce_as=AnnounceMode.STANDARD):
    return SignedTransaction(
        payload=f"{index:02X}" * 8,
        hash=f"{index:064X}",
        signer_public_key="A" * 64,
        type_name=type_name,
        announce_as=announce_as,
    )


def http_error(text):
    return NetworkError(
        error_type=NetworkErrorType.HTTP_ERROR,
        message=f"HTTP error 409: {text}",
        status_code=409,
        response_text=text,
    )


@pytest.fixture
def repository():
    repo = MagicMock(spec=TransactionRepository)
    repo.announce.return_value = {"message": "packet 9 was pushed to the network via /transactions"}
    return repo


class TestAnnounceAll:
    @pytest.mark.unit
    def test_announces_in_input_order(self, repository):
        calls = []
        repository.announce.side_effect = lambda tx: calls.append(tx.hash) or {"message": "ok"}
        transactions = [signed(i) for i in range(1, 5)]

        report = TransactionAnnouncer(repository).announce_all(transactions)

        assert calls == [tx.hash for tx in transactions]
        assert report.succeeded
        assert [o.status for o in report.outcomes] == [AnnouncementStatus.ACCEPTED] * 4
        assert report.not_announced == []

    @pytest.mark.unit
    def test_rejection_stops_and_reports_rest(self, repository):
        repository.announce.side_effect = [
            {"message": "ok"},
            http_error('{"code":"InvalidArgument","message":"payload invalid"}'),
        ]
        transactions = [signed(1), signed(2), signed(3)]

        report = TransactionAnnouncer(repository).announce_all(transactions)

        assert repository.announce.call_count == 2
        assert report.outcomes[0].status is AnnouncementStatus.ACCEPTED
        assert report.outcomes[1].status is AnnouncementStatus.REJECTED
        assert report.outcomes[1].message == '{"code":"InvalidArgument","message":"payload invalid"}'
        assert report.not_announced == [transactions[2]]
        assert report.failure is report.outcomes[1]
        assert not report.succeeded

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error_type",
        [
            NetworkErrorType.TIMEOUT,
            NetworkErrorType.CONNECTION_ERROR,
            NetworkErrorType.UNKNOWN,
        ],
    )
    def test_transport_failure(self, repository, error_type):
        repository.announce.side_effect = NetworkError(
            error_type=error_type, message="Cannot connect to node"
        )

        report = TransactionAnnouncer(repository).announce_all([signed(1), signed(2)])

        assert report.outcomes[0].status is AnnouncementStatus.TRANSPORT_ERROR
        assert report.not_announced == [signed(2)]
        repository.announce.assert_called_once()


class TestHashLockWait:
    @pytest.fixture
    def lock_and_bonded(self):
        return [
            signed(1, "hash_lock_transaction_v1"),
            signed(2, "aggregate_bonded_transaction_v2", AnnounceMode.PARTIAL),
        ]

    @pytest.mark.unit
    @patch("symbol_cli.announce.time")
    def test_waits_for_confirmed_lock(self, mock_time, repository, lock_and_bonded):
        mock_time.time.return_value = 0
        repository.get_transaction_status.side_effect = [
            None,
            {"group": "unconfirmed"},
            {"group": "confirmed"},
        ]

        report = TransactionAnnouncer(repository, 60, 2).announce_all(lock_and_bonded)

        assert report.succeeded
        assert repository.announce.call_args_list == [call(t) for t in lock_and_bonded]
        assert mock_time.sleep.call_count == 2
        repository.get_transaction_status.assert_called_with(lock_and_bonded[0].hash)

    @pytest.mark.unit
    @patch("symbol_cli.announce.time")
    def test_failed_lock_rejects_bonded(self, mock_time, repository, lock_and_bonded):
        mock_time.time.return_value = 0
        repository.get_transaction_status.return_value = {
            "group": "failed",
            "code": "Failure_Core_Insufficient_Balance",
        }

        report = TransactionAnnouncer(repository).announce_all(lock_and_bonded)

        repository.announce.assert_called_once_with(lock_and_bonded[0])
        assert report.outcomes[1].status is AnnouncementStatus.REJECTED
        assert "Failure_Core_Insufficient_Balance" in report.outcomes[1].message

    @pytest.mark.unit
    @patch("symbol_cli.announce.time")
    def test_lock_wait_times_out(self, mock_time, repository, lock_and_bonded):
        mock_time.time.side_effect = [0, 0, 5, 11]
        repository.get_transaction_status.side_effect = NetworkError(
            error_type=NetworkErrorType.TIMEOUT, message="timeout"
        )

        report = TransactionAnnouncer(repository, 10, 5).announce_all(lock_and_bonded)

        assert report.outcomes[1].status is AnnouncementStatus.TRANSPORT_ERROR
        assert repository.announce.call_count == 1

    @pytest.mark.unit
    def test_partial_without_lock_is_announced_directly(self, repository):
        bonded = signed(2, "aggregate_bonded_transaction_v2", AnnounceMode.PARTIAL)

        report = TransactionAnnouncer(repository).announce_all([bonded])

        assert report.succeeded
        repository.get_transaction_status.assert_not_called()


class TestTransactionRepository:
    @pytest.mark.unit
    @patch("symbol_cli.shared.network.requests")
    def test_partial_goes_to_partial_endpoint(self, mock_requests):
        response = MagicMock(status_code=202, content=b'{"message":"ok"}')
        response.json.return_value = {"message": "ok"}
        mock_requests.put.return_value = response
        repository = TransactionRepository(NetworkClient("http://localhost:3000"))

        repository.announce(signed(1, announce_as=AnnounceMode.PARTIAL))

        url = mock_requests.put.call_args[0][0]
        assert url == "http://localhost:3000/transactions/partial"
        assert mock_requests.put.call_args[1]["data"] == '{"payload": "' + "01" * 8 + '"}'

    @pytest.mark.unit
    def test_announce_client_never_retries(self):
        client = NetworkClient("http://localhost:3000")
        repository = TransactionRepository(client)
        assert repository._announce_client.retry_config.max_retries == 0
        assert repository._network_client.retry_config.max_retries == 3

    @pytest.mark.unit
    @patch("symbol_cli.shared.network.requests")
    def test_transaction_status(self, mock_requests):
        response = MagicMock(status_code=200)
        response.json.return_value = [{"group": "confirmed", "hash": "AB"}]
        mock_requests.post.return_value = response
        repository = TransactionRepository(NetworkClient("http://localhost:3000"))

        status = repository.get_transaction_status("ab")

        assert status == {"group": "confirmed", "hash": "AB"}
        assert mock_requests.post.call_args[1]["json"] == {"hashes": ["AB"]}
