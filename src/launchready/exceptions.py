"""Custom exceptions for launchready."""


class LaunchReadyError(Exception):
    """Base exception for launchready."""


class ConfigError(LaunchReadyError):
    """Raised when configuration is missing or invalid."""


class InvalidURLError(LaunchReadyError):
    """Raised when a scan target is not a usable http(s) URL."""


class FetchError(LaunchReadyError):
    """Raised when a page snapshot or remote report cannot be fetched."""


class LLMError(LaunchReadyError):
    """Raised when LLM API calls fail."""


class ResponseParseError(LaunchReadyError):
    """Raised when an LLM reply is not the JSON object we asked for."""
