"""
Exception classes for lyrics-resolver.

This module defines all custom exceptions used throughout the library.
Each exception distinguishes a different failure mode of a resolution
call so callers can decide what to surface and what to swallow.

Exception Hierarchy:
    LyricsResolverError (base)
        ConfigError - Configuration file issues
        ProviderError - A single provider call failed (network, decoding)
        NoMatchError - A provider answered but no candidate qualified
        LyricsParseError - Provider markup could not be turned into lines
        LyricsUnavailableError - Every configured provider was exhausted

Policy:
    ProviderError, NoMatchError and LyricsParseError are recovered locally
    by the resolver, which moves on to the next provider. Only
    LyricsUnavailableError is meant to reach application code.
"""


class LyricsResolverError(Exception):
    """
    Base exception for all lyrics-resolver errors.
    
    All custom exceptions in this project inherit from this class,
    allowing callers to catch every resolver failure with a single
    except clause if desired.
    
    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., query, provider).
    
    Example:
        try:
            lyrics = await resolver.get_lyrics(title="Song", artist="Artist")
        except LyricsResolverError as e:
            logger.error(f"Resolution failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """
    
    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.
        
        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'provider': Name of the provider involved
                     - 'url': Endpoint that was queried
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(LyricsResolverError):
    """
    Raised when there's an issue with the configuration file.
    
    Common causes:
        - An explicitly given config file does not exist
        - The file has invalid YAML syntax
        - A section is not a mapping
        - Invalid field values (negative timeout, unknown provider name)
    
    Example:
        raise ConfigError(
            "'matching.relaxed_tolerance' must be a non-negative integer",
            details={'field': 'matching.relaxed_tolerance', 'value': -3}
        )
    """
    pass


class ProviderError(LyricsResolverError):
    """
    Raised when a single provider call does not complete successfully.
    
    This is a NON-CRITICAL error. Providers translate it into an empty
    result; the request is never retried.
    
    Common causes:
        - Connection refused or reset
        - Request exceeded the configured timeout
        - Response body was not valid JSON
    
    Attributes:
        provider: Name of the provider whose call failed, if known.
    """
    
    def __init__(
        self,
        message: str,
        details: dict | None = None,
        provider: str | None = None
    ) -> None:
        super().__init__(message, details)
        self.provider = provider


class NoMatchError(ProviderError):
    """
    Raised when a provider responded but no candidate met the matching
    threshold or duration tolerance.
    
    Example:
        raise NoMatchError(
            "Lyrics unavailable",
            details={'title': 'Song', 'artist': 'Artist', 'duration': 202},
            provider="lrclib"
        )
    """
    pass


class LyricsParseError(ProviderError):
    """
    Raised by the word-synced provider when it received markup but the
    markup produced no lines.
    
    The codecs themselves never raise; this is the one place a parse
    failure is surfaced to a caller.
    """
    pass


class LyricsUnavailableError(LyricsResolverError):
    """
    Raised when every configured provider was tried without a usable result.
    
    Carries no per-provider diagnostics beyond the query in `details`.
    """
    pass
