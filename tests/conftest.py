import pytest
import tempfile
from pathlib import Path
from symbolchain.CryptoTypes import PrivateKey
from symbolchain.facade.SymbolFacade import SymbolFacade

from symbol_cli.config import CliConfig
from symbol_cli.profile import NetworkType, Profile, ProfileStore
from symbol_cli.resolvers.base import ExecutionContext

TESTNET_GENERATION_HASH = "49D6E1CE276A85B70EAFE52349AACCA389302E7A9754BCF1221E79494FC665A4"
TEST_PASSWORD = "correct horse battery"


class ScriptedPrompter:
    """Answers prompts from a list and records every question asked."""

    def __init__(self, answers=None):
        self.answers = list(answers or [])
        self.questions = []

    def prompt(self, message, hidden=False):
        self.questions.append((message, hidden))
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.answers.pop(0)


@pytest.fixture
def testnet_facade():
    """Fixture providing testnet Symbol facade"""
    return SymbolFacade("testnet")


@pytest.fixture
def random_private_key():
    """Fixture providing a random private key"""
    return PrivateKey.random()


@pytest.fixture
def testnet_account(testnet_facade, random_private_key):
    """Fixture providing a testnet account"""
    return testnet_facade.create_account(random_private_key)


@pytest.fixture
def cli_config():
    return CliConfig(hash_lock_timeout_seconds=10, hash_lock_poll_interval_seconds=1)


@pytest.fixture
def profile_store(tmp_path, cli_config):
    return ProfileStore(tmp_path, cli_config)


@pytest.fixture
def testnet_profile(random_private_key, cli_config):
    """Testnet profile holding ``random_private_key`` with a max fee default."""
    return Profile.create(
        name="P",
        network_type=NetworkType.TEST_NET,
        url="http://localhost:3000",
        password=TEST_PASSWORD,
        private_key=random_private_key,
        network_generation_hash=TESTNET_GENERATION_HASH,
        epoch_adjustment=1667250467,
        defaults={"max_fee": "200000"},
        config=cli_config,
    )


@pytest.fixture
def non_interactive():
    return ExecutionContext(interactive=False, prompter=ScriptedPrompter())


@pytest.fixture(autouse=True)
def isolate_cli_storage(monkeypatch):
    """Run tests with an isolated storage directory."""
    with tempfile.TemporaryDirectory(prefix="symbol-cli-test-") as tmp_dir:
        monkeypatch.setenv("SYMBOL_CLI_HOME", str(Path(tmp_dir)))
        yield


@pytest.fixture
def interactive_context():
    """Factory for an interactive context answering prompts from ``answers``."""

    def factory(*answers):
        prompter = ScriptedPrompter(answers)
        return ExecutionContext(interactive=True, prompter=prompter), prompter

    return factory


@pytest.fixture
def profile_password():
    return TEST_PASSWORD


@pytest.fixture
def generation_hash():
    return TESTNET_GENERATION_HASH
