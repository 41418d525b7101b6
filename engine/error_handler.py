"""
Logging setup and error types for the island.

- The "tides" logger: console warnings always, a daily file on request
- GameError and its save/validation flavours
- log_error / handle_critical_error for the frame loop and the save layer
"""
import logging
import traceback
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"

CONSOLE_FORMAT = "%(levelname)s [%(name)s] %(message)s"
FILE_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

logger = logging.getLogger("tides")
logger.setLevel(logging.DEBUG)

if not logger.handlers:
    _console = logging.StreamHandler()
    _console.setLevel(logging.WARNING)
    _console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(_console)


def enable_file_logging(log_dir: Optional[Path] = None) -> Path:
    """
    Attach the daily DEBUG log file and return its path.

    Importing the simulation never creates files; only the game entry
    point calls this. Calling it twice for the same day is harmless.
    """
    directory = Path(log_dir or LOG_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    log_file = (directory / f"tides_{datetime.now():%Y%m%d}.log").resolve()

    already = any(
        isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_file
        for h in logger.handlers
    )
    if not already:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(handler)
    return log_file


class GameError(Exception):
    """Base exception for game-specific errors."""
    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


class SaveError(GameError):
    """Misuse of the record store (bad keys and the like)."""


class ValidationError(GameError):
    """Rule data that breaks an invariant, e.g. tide bands with a gap."""


def log_error(
    error: Exception,
    context: str = "",
    user_message: Optional[str] = None,
) -> None:
    """
    Log an exception with its traceback under `context`.

    Args:
        error: The exception that occurred
        context: Where it happened, e.g. "save_game" or "load_game:map"
        user_message: What the player would be told, logged at INFO
    """
    trace = traceback.format_exc()
    logger.error("%s failed: %s: %s\n%s", context or "unknown", type(error).__name__, error, trace)
    if user_message:
        logger.info("%s: %s", context, user_message)


def handle_critical_error(
    error: Exception,
    context: str,
    messages: Optional[object] = None,
    recovery_action: Optional[Callable[[], None]] = None,
) -> bool:
    """
    Decide whether the frame loop can survive `error`.

    Args:
        error: The exception that occurred
        context: Where the error occurred
        messages: MessageLog to tell the player, if any
        recovery_action: Called once to try to recover

    Returns:
        True if the game can keep running, False if the caller should re-raise
    """
    log_error(error, context)

    if recovery_action is not None:
        try:
            recovery_action()
        except Exception as recovery_error:
            log_error(recovery_error, f"{context}:recovery")
        else:
            logger.info("Recovered from error in %s", context)
            return True

    if messages is not None and hasattr(messages, "add_rejection"):
        messages.add_rejection(f"Something went wrong ({context}); see the log.")
        return True

    return False
