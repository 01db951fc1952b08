import logging
from unittest.mock import patch

import pytest

from launchready.config import Config, load_config
from launchready.exceptions import ConfigError
from launchready.log import configure_logging, get_logger

ENV_VARS = (
    "BROWSERLESS_API_KEY",
    "FIRECRAWL_API_KEY",
    "GOOGLE_PAGESPEED_API_KEY",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "SNAPSHOT_BACKEND",
    "LLM_PROVIDER",
    "LLM_MODEL",
    "SCAN_CONCURRENCY",
    "PHASE_TIMEOUT",
    "LAUNCHREADY_LOG_FILE",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    with patch("launchready.config.load_dotenv"):
        yield monkeypatch


class TestLoadConfig:
    def test_defaults(self, clean_env):
        config = load_config()

        assert config.snapshot_backend == "browserless"
        assert config.llm_provider == "openai"
        assert config.concurrency == "parallel"
        assert config.default_model == "gpt-4o-mini"
        assert config.phase_timeout == 45.0
        assert not config.llm_enabled

    def test_reads_environment(self, clean_env):
        clean_env.setenv("BROWSERLESS_API_KEY", "bl")
        clean_env.setenv("ANTHROPIC_API_KEY", "sk-ant")
        clean_env.setenv("LLM_PROVIDER", "claude")
        clean_env.setenv("SCAN_CONCURRENCY", "sequential")
        clean_env.setenv("PHASE_TIMEOUT", "12.5")

        config = load_config()

        assert config.browserless_api_key == "bl"
        assert config.llm_enabled
        assert config.default_model == "claude-3-5-haiku-latest"
        assert config.concurrency == "sequential"
        assert config.phase_timeout == 12.5

    def test_cli_overrides_win(self, clean_env):
        clean_env.setenv("LLM_PROVIDER", "claude")
        clean_env.setenv("SNAPSHOT_BACKEND", "browserless")

        config = load_config(provider="openai", model="gpt-4.1-mini", backend="firecrawl", sequential=True)

        assert config.llm_provider == "openai"
        assert config.default_model == "gpt-4.1-mini"
        assert config.snapshot_backend == "firecrawl"
        assert config.concurrency == "sequential"

    @pytest.mark.parametrize(
        "name,value",
        [
            ("LLM_PROVIDER", "gemini"),
            ("SNAPSHOT_BACKEND", "selenium"),
            ("SCAN_CONCURRENCY", "threads"),
            ("PHASE_TIMEOUT", "soon"),
            ("PHASE_TIMEOUT", "-1"),
        ],
    )
    def test_invalid_values(self, clean_env, name, value):
        clean_env.setenv(name, value)
        with pytest.raises(ConfigError):
            load_config()


def test_provider_key_selection():
    config = Config(openai_api_key="sk-openai", anthropic_api_key="sk-ant")
    assert config.llm_api_key == "sk-openai"
    config.llm_provider = "claude"
    assert config.llm_api_key == "sk-ant"


class TestLogging:
    def test_get_logger_namespaces_names(self):
        assert get_logger("phases.seo").name == "launchready.phases.seo"
        assert get_logger("launchready.scanner").name == "launchready.scanner"

    def test_configure_logging_is_idempotent(self, tmp_path):
        logger = logging.getLogger("launchready")
        saved = list(logger.handlers)
        for handler in saved:
            logger.removeHandler(handler)
        try:
            configure_logging(verbose=True, log_file=str(tmp_path / "scan.log"))
            configured = list(logger.handlers)
            configure_logging(verbose=False)

            assert logger.handlers == configured
            assert len(configured) == 2
            assert logger.level == logging.WARNING
            assert all(h.level == logging.WARNING for h in logger.handlers)
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            for handler in saved:
                logger.addHandler(handler)
