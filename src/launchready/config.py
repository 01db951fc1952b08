"""Configuration loading and validation."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

_PROVIDERS = ("openai", "claude")
_BACKENDS = ("browserless", "firecrawl")
_CONCURRENCY = ("parallel", "sequential")


@dataclass
class Config:
    """Application configuration."""

    browserless_api_key: str = ""
    firecrawl_api_key: str = ""
    pagespeed_api_key: str = ""
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    snapshot_backend: str = "browserless"
    llm_provider: str = "openai"
    model: str = ""
    concurrency: str = "parallel"
    log_file: str = ""
    verbose: bool = False

    # Timeouts in seconds
    navigation_timeout: float = 10.0
    connect_timeout: float = 30.0
    pagespeed_timeout: float = 30.0
    header_timeout: float = 10.0
    robots_timeout: float = 5.0
    llm_timeout: float = 15.0
    phase_timeout: float = 45.0

    @property
    def default_model(self) -> str:
        if self.model:
            return self.model
        if self.llm_provider == "claude":
            return "claude-3-5-haiku-latest"
        return "gpt-4o-mini"

    @property
    def llm_api_key(self) -> str:
        if self.llm_provider == "claude":
            return self.anthropic_api_key
        return self.openai_api_key

    @property
    def llm_enabled(self) -> bool:
        return bool(self.llm_api_key)

    def validate(self) -> None:
        """Validate configuration values.

        API keys are optional: a missing key selects the degraded scan path
        for the feature it gates rather than failing the scan.
        """
        if self.llm_provider not in _PROVIDERS:
            raise ConfigError(
                f"Unknown LLM provider: {self.llm_provider}. Use 'openai' or 'claude'."
            )
        if self.snapshot_backend not in _BACKENDS:
            raise ConfigError(
                f"Unknown snapshot backend: {self.snapshot_backend}. "
                "Use 'browserless' or 'firecrawl'."
            )
        if self.concurrency not in _CONCURRENCY:
            raise ConfigError(
                f"Unknown concurrency mode: {self.concurrency}. "
                "Use 'parallel' or 'sequential'."
            )
        for name in (
            "navigation_timeout",
            "connect_timeout",
            "pagespeed_timeout",
            "header_timeout",
            "robots_timeout",
            "llm_timeout",
            "phase_timeout",
        ):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive.")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}.") from e


def load_config(
    provider: Optional[str] = None,
    model: Optional[str] = None,
    backend: Optional[str] = None,
    sequential: bool = False,
    verbose: bool = False,
) -> Config:
    """Load config from .env and apply CLI overrides."""
    load_dotenv()

    config = Config(
        browserless_api_key=os.getenv("BROWSERLESS_API_KEY", ""),
        firecrawl_api_key=os.getenv("FIRECRAWL_API_KEY", ""),
        pagespeed_api_key=os.getenv("GOOGLE_PAGESPEED_API_KEY", ""),
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
        snapshot_backend=backend or os.getenv("SNAPSHOT_BACKEND", "browserless"),
        llm_provider=provider or os.getenv("LLM_PROVIDER", "openai"),
        model=model or os.getenv("LLM_MODEL", ""),
        concurrency="sequential" if sequential else os.getenv("SCAN_CONCURRENCY", "parallel"),
        log_file=os.getenv("LAUNCHREADY_LOG_FILE", ""),
        verbose=verbose,
        phase_timeout=_env_float("PHASE_TIMEOUT", 45.0),
    )

    config.validate()
    return config
