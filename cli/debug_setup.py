"""Debug console setup for CLI"""

from rich.console import Console

import settings
from utils.debug_console import configure_logging, create_debug_console, setup_debug_logger


def setup_debug_console(debug: bool) -> Console:
    """
    Configure logging and return the console the CLI prints to

    Args:
        debug: Whether debug mode is enabled

    Returns:
        Console instance (either regular or debug-capturing)
    """
    log_file = configure_logging(debug=debug, level=settings.LOG_LEVEL, log_file=settings.DEBUG_LOG_FILE)
    if not log_file:
        return Console()

    debug_logger = setup_debug_logger(log_file)
    console = create_debug_console(debug_enabled=True, debug_logger=debug_logger)
    debug_logger.debug("[CLI] ===== CLI SESSION STARTED =====")
    console.print(f"[yellow]Debug mode enabled - verbose logging will be written to {log_file}[/yellow]")
    return console
