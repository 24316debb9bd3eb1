"""
Configuration management for lyrics-resolver.

This module handles loading, validating, and providing access to the
resolver configuration stored in lyrics_resolver.yaml.

The configuration file contains:
    - Network settings shared by every provider call (timeout, user agent)
    - Provider priority order and endpoint base URLs
    - Matching thresholds (duration tolerances, name similarity)
    - Aggregate-mode caps (result count, plain-text results, dedup key)

Every section is optional. A missing default file yields the built-in
defaults, so the library works without any configuration at all.

Environment Overrides:
    A .env file in the working directory is loaded with python-dotenv.
    LYRICS_RESOLVER_TIMEOUT and LYRICS_RESOLVER_USER_AGENT take precedence
    over the values in the YAML file.

Example lyrics_resolver.yaml:
    network:
      timeout: 15
      user_agent: "lyrics-resolver/1.0"

    providers:
      order: [better_lyrics, simpmusic, lrclib]

    matching:
      strict_tolerance: 2
      relaxed_tolerance: 5
      name_similarity_threshold: 0.6

    aggregate:
      max_results: 5
      max_plain_per_provider: 1
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from lyrics_resolver.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "lyrics_resolver.yaml"

# Environment variables that override the file
ENV_TIMEOUT = "LYRICS_RESOLVER_TIMEOUT"
ENV_USER_AGENT = "LYRICS_RESOLVER_USER_AGENT"

DEFAULT_USER_AGENT = "lyrics-resolver/1.0 (+https://github.com/lyrics-resolver)"

# Provider names, also the identifiers used in providers.order
PROVIDER_BETTER_LYRICS = "better_lyrics"
PROVIDER_SIMPMUSIC = "simpmusic"
PROVIDER_LRCLIB = "lrclib"
KNOWN_PROVIDERS = (PROVIDER_BETTER_LYRICS, PROVIDER_SIMPMUSIC, PROVIDER_LRCLIB)


@dataclass(frozen=True)
class NetworkConfig:
    """
    Transport settings shared by all providers.
    
    Attributes:
        timeout: Total timeout in seconds for a single HTTP request.
        user_agent: Value of the User-Agent header sent with every request.
    """
    timeout: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class ProvidersConfig:
    """
    Provider order and endpoints.
    
    Attributes:
        order: Priority order used by single-result resolution and the
               iteration order of aggregate resolution.
        lrclib_url: Base URL of the LRCLIB API (search lives under /api/search).
        simpmusic_url: Base URL of the SimpMusic lyrics API (video id is appended).
        better_lyrics_url: Base URL of the BetterLyrics API (TTML under /getLyrics).
    """
    order: tuple[str, ...] = KNOWN_PROVIDERS
    lrclib_url: str = "https://lrclib.net"
    simpmusic_url: str = "https://api-lyrics.simpmusic.org/v1"
    better_lyrics_url: str = "https://lyrics-api.boidu.dev"


@dataclass(frozen=True)
class MatchingConfig:
    """
    Candidate selection thresholds.
    
    Attributes:
        strict_tolerance: Max duration difference (seconds) for the strict policy.
        relaxed_tolerance: Max duration difference (seconds) for the relaxed policy.
        name_similarity_threshold: Minimum average title/artist similarity
                                   required when the duration is unknown.
                                   The comparison is strict (score must exceed it).
        synced_bonus: Score added to candidates carrying synced lyrics when
                      ranking by name. Never counted against the threshold.
    """
    strict_tolerance: int = 2
    relaxed_tolerance: int = 5
    name_similarity_threshold: float = 0.6
    synced_bonus: float = 0.1


@dataclass(frozen=True)
class AggregateConfig:
    """
    Aggregate ("get all lyrics") limits.
    
    Attributes:
        max_results: Results accepted across all providers combined.
        max_plain_per_provider: Unsynced results accepted from one provider.
        dedup_key_length: Leading characters of a text used as its dedup key.
    """
    max_results: int = 5
    max_plain_per_provider: int = 1
    dedup_key_length: int = 100


@dataclass(frozen=True)
class Config:
    """
    Complete resolver configuration.
    
    Created by load_config(), or directly as Config() for the defaults.
    
    Example:
        config = load_config()
        print(f"Timeout: {config.network.timeout}s")
        print(f"Provider order: {', '.join(config.providers.order)}")
    """
    network: NetworkConfig = field(default_factory=NetworkConfig)
    providers: ProvidersConfig = field(default_factory=ProvidersConfig)
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    aggregate: AggregateConfig = field(default_factory=AggregateConfig)


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from lyrics_resolver.yaml.
    
    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for lyrics_resolver.yaml in the current
                     working directory and falls back to defaults when absent.
    
    Returns:
        Config: A frozen dataclass containing all configuration values.
    
    Raises:
        ConfigError: If an explicit config file is not found, the YAML is
                     invalid, a section is not a mapping, or a value is invalid.
    
    Behavior:
        1. Load .env (python-dotenv) without overriding the real environment
        2. Locate config file (explicit path or CWD/lyrics_resolver.yaml)
        3. Read and parse YAML content (empty file = all defaults)
        4. Parse each section, applying defaults for missing fields
        5. Apply environment overrides to the network section
    
    Example:
        try:
            config = load_config(Path("custom.yaml"))
        except ConfigError as e:
            print(f"Configuration error: {e.message}")
            sys.exit(1)
    """
    load_dotenv()
    
    explicit = config_path is not None
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
    
    raw_config: dict[str, Any] = {}
    
    if config_path.exists():
        raw_config = _read_config_file(config_path)
    elif explicit:
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )
    
    for section in ("network", "providers", "matching", "aggregate"):
        value = raw_config.get(section)
        if value is not None and not isinstance(value, dict):
            raise ConfigError(
                f"Section '{section}' must be a dictionary",
                details={"section": section}
            )
    
    network = _parse_network_config(raw_config.get("network") or {})
    network = _apply_environment(network)
    
    return Config(
        network=network,
        providers=_parse_providers_config(raw_config.get("providers") or {}),
        matching=_parse_matching_config(raw_config.get("matching") or {}),
        aggregate=_parse_aggregate_config(raw_config.get("aggregate") or {}),
    )


def _read_config_file(config_path: Path) -> dict[str, Any]:
    """
    Read and parse the YAML file, returning a dictionary.
    
    An empty file is accepted and yields an empty dictionary.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except IOError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e
    
    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e
    
    if raw_config is None:
        return {}
    
    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )
    
    return raw_config


def _parse_network_config(section: dict[str, Any]) -> NetworkConfig:
    defaults = NetworkConfig()
    
    timeout = section.get("timeout", defaults.timeout)
    user_agent = section.get("user_agent", defaults.user_agent)
    
    return NetworkConfig(
        timeout=_positive_number(timeout, "network.timeout"),
        user_agent=_non_empty_string(user_agent, "network.user_agent"),
    )


def _parse_providers_config(section: dict[str, Any]) -> ProvidersConfig:
    """
    Parse the providers section.
    
    Raises:
        ConfigError: If order is not a list, names an unknown provider,
                     repeats a provider, or if a URL is empty.
    """
    defaults = ProvidersConfig()
    
    raw_order = section.get("order")
    if raw_order is None:
        order = defaults.order
    else:
        if not isinstance(raw_order, list) or not raw_order:
            raise ConfigError(
                "'providers.order' must be a non-empty list",
                details={"field": "providers.order", "value": raw_order}
            )
        
        for name in raw_order:
            if name not in KNOWN_PROVIDERS:
                raise ConfigError(
                    f"Unknown provider in 'providers.order': {name}",
                    details={
                        "field": "providers.order",
                        "value": name,
                        "known": list(KNOWN_PROVIDERS),
                    }
                )
        
        if len(set(raw_order)) != len(raw_order):
            raise ConfigError(
                "'providers.order' must not contain duplicates",
                details={"field": "providers.order", "value": raw_order}
            )
        order = tuple(raw_order)
    
    urls = {}
    for key in ("lrclib_url", "simpmusic_url", "better_lyrics_url"):
        value = section.get(key, getattr(defaults, key))
        # Trailing slashes would produce '//' when paths are appended
        urls[key] = _non_empty_string(value, f"providers.{key}").rstrip("/")
    
    return ProvidersConfig(order=order, **urls)


def _parse_matching_config(section: dict[str, Any]) -> MatchingConfig:
    defaults = MatchingConfig()
    
    threshold = section.get("name_similarity_threshold", defaults.name_similarity_threshold)
    if not _is_number(threshold) or not 0 <= threshold <= 1:
        raise ConfigError(
            "'matching.name_similarity_threshold' must be a number between 0 and 1",
            details={"field": "matching.name_similarity_threshold", "value": threshold}
        )
    
    bonus = section.get("synced_bonus", defaults.synced_bonus)
    if not _is_number(bonus) or bonus < 0:
        raise ConfigError(
            "'matching.synced_bonus' must be a non-negative number",
            details={"field": "matching.synced_bonus", "value": bonus}
        )
    
    return MatchingConfig(
        strict_tolerance=_non_negative_int(
            section.get("strict_tolerance", defaults.strict_tolerance),
            "matching.strict_tolerance"
        ),
        relaxed_tolerance=_non_negative_int(
            section.get("relaxed_tolerance", defaults.relaxed_tolerance),
            "matching.relaxed_tolerance"
        ),
        name_similarity_threshold=float(threshold),
        synced_bonus=float(bonus),
    )


def _parse_aggregate_config(section: dict[str, Any]) -> AggregateConfig:
    defaults = AggregateConfig()
    
    max_results = section.get("max_results", defaults.max_results)
    if not isinstance(max_results, int) or isinstance(max_results, bool) or max_results < 1:
        raise ConfigError(
            "'aggregate.max_results' must be a positive integer",
            details={"field": "aggregate.max_results", "value": max_results}
        )
    
    dedup_key_length = section.get("dedup_key_length", defaults.dedup_key_length)
    if (
        not isinstance(dedup_key_length, int)
        or isinstance(dedup_key_length, bool)
        or dedup_key_length < 1
    ):
        raise ConfigError(
            "'aggregate.dedup_key_length' must be a positive integer",
            details={"field": "aggregate.dedup_key_length", "value": dedup_key_length}
        )
    
    return AggregateConfig(
        max_results=max_results,
        max_plain_per_provider=_non_negative_int(
            section.get("max_plain_per_provider", defaults.max_plain_per_provider),
            "aggregate.max_plain_per_provider"
        ),
        dedup_key_length=dedup_key_length,
    )


def _apply_environment(network: NetworkConfig) -> NetworkConfig:
    """
    Apply environment variable overrides to the network section.
    
    Environment values take precedence over file-based configuration.
    Empty variables are ignored.
    """
    timeout = network.timeout
    user_agent = network.user_agent
    
    raw_timeout = os.getenv(ENV_TIMEOUT)
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ConfigError(
                f"{ENV_TIMEOUT} must be a number, got '{raw_timeout}'",
                details={"field": ENV_TIMEOUT, "value": raw_timeout}
            ) from e
        timeout = _positive_number(timeout, ENV_TIMEOUT)
    
    raw_user_agent = os.getenv(ENV_USER_AGENT)
    if raw_user_agent:
        user_agent = raw_user_agent.strip()
    
    return NetworkConfig(timeout=timeout, user_agent=user_agent)


# =============================================================================
# VALUE HELPERS
# =============================================================================

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _positive_number(value: Any, field_name: str) -> float:
    if not _is_number(value) or value <= 0:
        raise ConfigError(
            f"'{field_name}' must be a positive number",
            details={"field": field_name, "value": value}
        )
    return float(value)


def _non_negative_int(value: Any, field_name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ConfigError(
            f"'{field_name}' must be a non-negative integer",
            details={"field": field_name, "value": value}
        )
    return value


def _non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(
            f"'{field_name}' must be a non-empty string",
            details={"field": field_name}
        )
    return value.strip()
