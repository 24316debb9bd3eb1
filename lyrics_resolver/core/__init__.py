"""
Core module for lyrics-resolver.

This module provides the foundational components used throughout the package:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with console and file outputs
    - http: Shared aiohttp transport used by every provider

Usage:
    from lyrics_resolver.core import (
        Config, load_config,
        HttpClient,
        setup_logging, get_logger,
        LyricsResolverError, LyricsUnavailableError
    )
"""

from lyrics_resolver.core.config import (
    AggregateConfig,
    Config,
    MatchingConfig,
    NetworkConfig,
    ProvidersConfig,
    load_config,
)
from lyrics_resolver.core.exceptions import (
    ConfigError,
    LyricsParseError,
    LyricsResolverError,
    LyricsUnavailableError,
    NoMatchError,
    ProviderError,
)
from lyrics_resolver.core.http import HttpClient
from lyrics_resolver.core.logger import (
    get_logger,
    log_lyrics_failure,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "NetworkConfig",
    "ProvidersConfig",
    "MatchingConfig",
    "AggregateConfig",
    "load_config",
    # Exceptions
    "LyricsResolverError",
    "ConfigError",
    "ProviderError",
    "NoMatchError",
    "LyricsParseError",
    "LyricsUnavailableError",
    # Transport
    "HttpClient",
    # Logger
    "setup_logging",
    "get_logger",
    "log_lyrics_failure",
    "shutdown_logging",
]
