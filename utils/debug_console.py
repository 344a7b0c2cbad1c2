"""Logging setup and a Rich console that mirrors its output into the debug log"""

import io
import logging
import os
import re
from typing import Optional

from rich.console import Console as RichConsole

logger = logging.getLogger(__name__)

ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugCapturingConsole(RichConsole):
    """
    Rich Console that also writes a plain text copy of everything it prints
    to a logger, so CLI output lands in the debug log next to library logs.
    """

    def __init__(self, debug_logger: Optional[logging.Logger] = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.debug_logger = debug_logger
        self._log_prefix = "[CONSOLE] "

    def print(self, *objects, **kwargs):
        super().print(*objects, **kwargs)

        if self.debug_logger and self.debug_logger.isEnabledFor(logging.DEBUG):
            plain_text = self._render_to_plain_text(*objects, **kwargs)
            if plain_text.strip():
                self.debug_logger.debug(f"{self._log_prefix}{plain_text}")

    def _render_to_plain_text(self, *objects, **kwargs) -> str:
        buffer = io.StringIO()
        RichConsole(file=buffer, force_terminal=False, width=self.width).print(*objects, **kwargs)
        return ANSI_ESCAPE.sub('', buffer.getvalue()).rstrip()


def configure_logging(debug: bool = False, level: str = "info", log_file: str = "oauth_debug.log") -> Optional[str]:
    """
    Configure the root logger for the CLI.

    Without debug, logs go to stderr at the configured level. With debug,
    everything at DEBUG level also goes to log_file (appended).

    Args:
        debug: Whether debug mode is enabled
        level: Level name used when debug is off
        log_file: Debug log path

    Returns:
        Absolute path of the debug log, or None when debug is off
    """
    root_logger = logging.getLogger()

    # Clear existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if not debug:
        root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
        return None

    root_logger.setLevel(logging.DEBUG)
    log_path = os.path.abspath(log_file)
    file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    logger.info(f"Debug logging enabled - appending to {log_path}")
    return log_path


def setup_debug_logger(log_file: str) -> logging.Logger:
    """
    Set up a dedicated logger for console output capture.

    Args:
        log_file: Path to debug log file

    Returns:
        Configured logger instance
    """
    console_logger = logging.getLogger("debug_console")
    console_logger.setLevel(logging.DEBUG)

    for handler in console_logger.handlers[:]:
        console_logger.removeHandler(handler)

    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s'))
    console_logger.addHandler(file_handler)

    # Root logger already writes to the same file
    console_logger.propagate = False

    return console_logger


def create_debug_console(debug_enabled: bool = False,
                         debug_logger: Optional[logging.Logger] = None) -> RichConsole:
    """
    Create the console for the CLI: capturing in debug mode, plain otherwise.
    """
    if debug_enabled and debug_logger:
        return DebugCapturingConsole(debug_logger=debug_logger)
    return RichConsole()
