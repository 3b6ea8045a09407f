"""Tests for the repository factory."""

import pytest
from unittest.mock import MagicMock, patch

from symbol_cli.announce import TransactionRepository
from symbol_cli.config import CliConfig
from symbol_cli.errors import NetworkQueryError
from symbol_cli.features.multisig.service import MultisigService
from symbol_cli.features.namespace.service import NamespaceService
from symbol_cli.features.restriction.service import RestrictionMosaicRepository
from symbol_cli.repository import RepositoryFactory, parse_epoch_adjustment
from symbol_cli.shared.network import NetworkError, NetworkErrorType, RetryConfig


class TestRepositoryFactory:
    @pytest.mark.unit
    def test_repositories_share_client(self):
        factory = RepositoryFactory("http://localhost:3000")
        assert isinstance(factory.create_namespace_service(), NamespaceService)
        assert isinstance(factory.create_multisig_service(), MultisigService)
        assert isinstance(factory.create_restriction_mosaic_repository(), RestrictionMosaicRepository)
        assert isinstance(factory.create_transaction_repository(), TransactionRepository)
        assert factory.create_namespace_service().network_client is factory.network_client

    @pytest.mark.unit
    def test_config_applied(self):
        config = CliConfig(retry_config=RetryConfig(max_retries=5))
        factory = RepositoryFactory("http://localhost:3000", config)
        assert factory.network_client.retry_config.max_retries == 5

    @pytest.mark.unit
    def test_fetch_network_properties(self, generation_hash):
        factory = RepositoryFactory("http://localhost:3000")
        factory.network_client = MagicMock()
        factory.network_client.get.side_effect = [
            {"networkGenerationHashSeed": generation_hash.lower()},
            {"network": {"epochAdjustment": "1667250467s"}},
        ]

        properties = factory.fetch_network_properties()

        assert properties.generation_hash == generation_hash
        assert properties.epoch_adjustment == 1667250467

    @pytest.mark.unit
    def test_fetch_network_properties_failure(self):
        factory = RepositoryFactory("http://localhost:3000")
        factory.network_client = MagicMock()
        factory.network_client.get.side_effect = NetworkError(
            error_type=NetworkErrorType.CONNECTION_ERROR, message="Cannot connect"
        )
        with pytest.raises(NetworkQueryError):
            factory.fetch_network_properties()


class TestParseEpochAdjustment:
    @pytest.mark.unit
    def test_forms(self):
        assert parse_epoch_adjustment("1615853185s") == 1615853185
        assert parse_epoch_adjustment(1615853185) == 1615853185

    @pytest.mark.unit
    def test_invalid(self):
        with pytest.raises(NetworkQueryError):
            parse_epoch_adjustment("soon")
