"""
Logging configuration for lyrics-resolver.

This module sets up the logging system with multiple outputs:
    - Console: Compact colored messages written through tqdm
    - log_full_<ts>.log: Complete log of all events (DEBUG and above)
    - log_errors_<ts>.log: Only ERROR and CRITICAL level messages
    - lyrics_failures_<ts>.log: Queries for which no provider had lyrics

File outputs are only created when a log directory is given. A library
user who never calls setup_logging() gets no handlers at all, and the
records propagate to whatever the host application configured.

Usage:
    from lyrics_resolver.core.logger import setup_logging, get_logger
    
    setup_logging(Path("logs"), verbose=True)  # Call once at startup
    logger = get_logger(__name__)              # Get logger for each module
    
    logger.info("Resolving lyrics")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


# Package root logger; everything below it is configured by setup_logging()
ROOT_LOGGER_NAME = "lyrics_resolver"

# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that prefixes each message with its colored level name.
    
    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """
    
    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }
    
    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        return f"{color}{record.levelname}{Colors.RESET}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to the console through tqdm.write().
    
    Keeps log lines from breaking any progress bar the CLI draws while
    iterating over providers.
    
    Attributes:
        stream: The output stream (defaults to sys.stderr).
    """
    
    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream
    
    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream or sys.stderr)
        except Exception:
            self.handleError(record)


class LyricsFailureReportHandler(logging.Handler):
    """
    Handler that captures unresolved queries for the lyrics failure report.
    
    Writes one human-readable entry per record carrying failure fields:
    
        Artist Name - Song Title
        Another Artist - Another Song [dQw4w9WgXcQ]
    
    The handler looks for specific extra fields in log records:
        - 'lyrics_failed_title': The requested title
        - 'lyrics_failed_artist': The requested artist
        - 'lyrics_failed_video_id': The video id, if one was supplied
    
    Records without these fields are ignored.
    
    Attributes:
        report_path: Path to the report file.
        report_file: Open file handle (opened by open()).
    """
    
    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None
    
    def open(self) -> None:
        """Open the report file for writing (overwrites existing content)."""
        self.report_file = open(self.report_path, "w", encoding="utf-8")
    
    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "lyrics_failed_title"):
            return
        
        if self.report_file is None:
            return
        
        try:
            title = getattr(record, "lyrics_failed_title", "Unknown")
            artist = getattr(record, "lyrics_failed_artist", "Unknown")
            video_id = getattr(record, "lyrics_failed_video_id", None)
            
            entry = f"{artist} - {title}"
            if video_id:
                entry += f" [{video_id}]"
            
            self.report_file.write(f"{entry}\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)
    
    def close(self) -> None:
        """Close the report file handle. Safe to call multiple times."""
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """
    Filter that only allows ERROR and CRITICAL level records.
    
    Used by the error log file handler to exclude DEBUG, INFO, and WARNING.
    """
    
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(log_dir: Path | None = None, verbose: bool = False) -> None:
    """
    Configure the logging system for the package.
    
    This function should be called ONCE at application startup. The CLI
    calls it before loading the configuration.
    
    Args:
        log_dir: Directory where log files will be created. When None,
                 only the console handler is installed.
        verbose: Show DEBUG messages on the console (provider attempts,
                 candidate counts, dedup decisions).
    
    Behavior:
        1. Configure the package logger level to DEBUG, without propagation
        2. Remove any handlers from a previous call
        3. Add the console handler (TqdmLoggingHandler, colored)
           - Level: INFO, or DEBUG when verbose
        4. If log_dir is given, create it and add:
           - log_full_{timestamp}.log (DEBUG)
           - log_errors_{timestamp}.log (ERROR+ via ErrorOnlyFilter)
           - lyrics_failures_{timestamp}.log (LyricsFailureReportHandler)
    
    See Also:
        log_lyrics_failure(): Helper to log with correct extra fields
    """
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(logging.DEBUG)
    package_logger.propagate = False
    
    _remove_handlers(package_logger)
    
    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(ColoredConsoleFormatter())
    package_logger.addHandler(console_handler)
    
    if log_dir is None:
        return
    
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    file_formatter = logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT)
    
    # Full log file handler
    full_handler = logging.FileHandler(
        log_dir / f"log_full_{timestamp}.log", mode="w", encoding="utf-8"
    )
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(file_formatter)
    package_logger.addHandler(full_handler)
    
    # Error-only log file handler
    error_handler = logging.FileHandler(
        log_dir / f"log_errors_{timestamp}.log", mode="w", encoding="utf-8"
    )
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(file_formatter)
    error_handler.addFilter(ErrorOnlyFilter())
    package_logger.addHandler(error_handler)
    
    # Lyrics failures handler
    failures_handler = LyricsFailureReportHandler(
        log_dir / f"lyrics_failures_{timestamp}.log"
    )
    failures_handler.open()
    package_logger.addHandler(failures_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.
    
    Args:
        name: The logger name, typically __name__ of the calling module.
              This creates a hierarchy like 'lyrics_resolver.providers.lrclib'.
    
    Returns:
        logging.Logger: A logger instance configured by setup_logging().
    """
    return logging.getLogger(name)


def log_lyrics_failure(
    logger: logging.Logger,
    title: str,
    artist: str,
    video_id: str | None = None
) -> None:
    """
    Log a query for which no lyrics could be resolved.
    
    Logs a WARNING and attaches the extra fields LyricsFailureReportHandler
    uses to write the lyrics failure report.
    
    Example:
        log_lyrics_failure(logger, title="Instrumental", artist="Artist")
        
        # Console: "WARNING: No lyrics found for: Artist - Instrumental"
        # Report:  "Artist - Instrumental"
    """
    logger.warning(
        f"No lyrics found for: {artist} - {title}",
        extra={
            "lyrics_failed_title": title,
            "lyrics_failed_artist": artist,
            "lyrics_failed_video_id": video_id,
        }
    )


def shutdown_logging() -> None:
    """
    Flush, close and remove every handler installed by setup_logging().
    
    Records propagate to the root logger again afterwards. Safe to call
    when setup_logging() was never called.
    """
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    _remove_handlers(package_logger)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


def _remove_handlers(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except OSError:
            pass
        logger.removeHandler(handler)
