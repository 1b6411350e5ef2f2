"""
Logging configuration for the genutil package.

Provides structured logging with two outputs:
- Console output (colored, user-friendly)
- File output (JSON lines, for debugging)

The logger stays silent until setup() is called, so importing the package
never writes to the console on its own.
"""

import sys
import logging
from pathlib import Path
from typing import Optional
import structlog


LOGGER_NAME = "genutil"


# Console colors
class Colors:
    """ANSI escape sequences used by the console renderer."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    MAGENTA = '\033[95m'
    CYAN = '\033[96m'
    GRAY = '\033[90m'


def add_log_level_colors(_, level: str, event_dict: dict) -> dict:
    """Add colors to log level in console output."""
    level_colors = {
        "debug": Colors.GRAY,
        "info": Colors.BLUE,
        "warning": Colors.YELLOW,
        "error": Colors.RED,
        "critical": Colors.RED + Colors.BOLD,
    }

    color = level_colors.get(level.lower(), "")
    if color:
        event_dict["level"] = f"{color}{level.upper()}{Colors.RESET}"
    else:
        event_dict["level"] = level.upper()

    return event_dict


def format_file_context(logger, method_name, event_dict: dict) -> dict:
    """
    Format the file being worked on for display in console logs.

    Creates a prefix like [sorting] or [.../data/prices.csv.gz] from the
    ``component`` and ``file_context`` keys of the event.
    """
    file_context = event_dict.get("file_context")
    component = event_dict.get("component")

    context_parts = []

    if component:
        component_color = {
            'resolver': Colors.GREEN,
            'reader': Colors.BLUE,
            'writer': Colors.YELLOW,
        }.get(component, Colors.GRAY)
        context_parts.append(f"{component_color}{component}{Colors.RESET}")

    if file_context:
        file_context = str(file_context)
        # Shorten long file paths
        if len(file_context) > 40:
            file_context = "..." + file_context[-37:]
        context_parts.append(f"{Colors.MAGENTA}{file_context}{Colors.RESET}")

    if context_parts:
        event_dict["context"] = f"[{' '.join(context_parts)}]"

    return event_dict


def _console_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        format_file_context,
        add_log_level_colors,
        structlog.dev.ConsoleRenderer(colors=True),
    ]


class GenutilLogger:
    """
    Logger for the genutil package.

    Features:
    - Console output (colored, user-friendly)
    - File output (detailed JSON log)
    """

    _instance = None
    _initialized = False

    def __new__(cls):
        """One logger per process."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Set attributes on first construction only."""
        if self._initialized:
            return

        # structlog logger, None while silent
        self.logger = None
        self.log_file: Optional[Path] = None

        self._initialized = True

    def setup(
        self,
        console_level: str = "INFO",
        log_file: Optional[Path] = None,
    ):
        """
        Set up logging handlers.

        Args:
            console_level: Level for console output (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Path to detailed log file (optional, overwritten if present)
        """
        level = getattr(logging, console_level.upper(), logging.INFO)

        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)

            processors = [
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ]

            # structlog -> stdlib logging -> file (JSON) + console
            structlog.configure(
                processors=processors,
                wrapper_class=structlog.stdlib.BoundLogger,
                context_class=dict,
                logger_factory=structlog.stdlib.LoggerFactory(),
                cache_logger_on_first_use=False,
            )

            stdlib_logger = logging.getLogger(LOGGER_NAME)
            stdlib_logger.handlers.clear()
            stdlib_logger.setLevel(logging.DEBUG)
            stdlib_logger.propagate = False

            file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                structlog.stdlib.ProcessorFormatter(
                    processor=structlog.processors.JSONRenderer(),
                    foreign_pre_chain=processors[:-1],
                )
            )
            stdlib_logger.addHandler(file_handler)

            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(
                structlog.stdlib.ProcessorFormatter(
                    processor=structlog.dev.ConsoleRenderer(colors=True),
                    foreign_pre_chain=processors[:-1],
                )
            )
            stdlib_logger.addHandler(console_handler)
        else:
            # Console only
            logging.getLogger(LOGGER_NAME).handlers.clear()
            structlog.configure(
                processors=_console_processors(),
                wrapper_class=structlog.make_filtering_bound_logger(level),
                context_class=dict,
                logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
                cache_logger_on_first_use=False,
            )

        self.log_file = log_file
        self.logger = structlog.get_logger(LOGGER_NAME)

        if log_file:
            self.info(f"Detailed log file: {log_file}")

    def reconfigure_level(self, console_level: str = "INFO"):
        """
        Change the console logging level after setup.

        Updates the console handler in place when file logging is active,
        otherwise reconfigures the structlog filtering level.

        Args:
            console_level: New console logging level
        """
        level = getattr(logging, console_level.upper(), logging.INFO)
        stdlib_logger = logging.getLogger(LOGGER_NAME)

        if stdlib_logger.handlers:
            for handler in stdlib_logger.handlers:
                if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                    handler.setLevel(level)
            self.debug(f"Updated console logging level to {console_level.upper()}")
        else:
            structlog.configure(
                processors=_console_processors(),
                wrapper_class=structlog.make_filtering_bound_logger(level),
                context_class=dict,
                logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
                cache_logger_on_first_use=False,
            )
            self.logger = structlog.get_logger(LOGGER_NAME)

    def _emit(self, level: str, message: str, **kwargs):
        # Silent until setup() has run
        if self.logger:
            getattr(self.logger, level)(message, **kwargs)

    def debug(self, message: str, **kwargs):
        self._emit("debug", message, **kwargs)

    def info(self, message: str, **kwargs):
        self._emit("info", message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._emit("warning", message, **kwargs)

    def error(self, message: str, **kwargs):
        self._emit("error", message, **kwargs)

    def critical(self, message: str, **kwargs):
        """Log a critical message; used right before the process is aborted."""
        self._emit("critical", message, **kwargs)

    def reset(self):
        """Drop the configured logger so the package is silent again."""
        stdlib_logger = logging.getLogger(LOGGER_NAME)
        for handler in stdlib_logger.handlers:
            handler.close()
        stdlib_logger.handlers.clear()
        self.logger = None
        self.log_file = None


def get_logger() -> GenutilLogger:
    """Get the singleton logger instance."""
    return GenutilLogger()


def setup_logging(
    console_level: str = "INFO",
    log_file: Optional[Path] = None,
):
    """
    Set up logging for the package.

    Args:
        console_level: Console output level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path to detailed log file

    Returns:
        The configured GenutilLogger
    """
    logger = get_logger()
    logger.setup(console_level, log_file)
    return logger


__all__ = ['GenutilLogger', 'get_logger', 'setup_logging']
