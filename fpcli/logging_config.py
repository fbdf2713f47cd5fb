import logging

import structlog
from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class StderrRichHandler(RichHandler):
    """RichHandler bound to stderr, so stdout only carries manifest output."""

    def __init__(self, **kwargs):
        kwargs.setdefault("console", Console(stderr=True))
        kwargs.setdefault("show_path", False)
        kwargs.setdefault("show_time", False)
        super().__init__(**kwargs)

    def get_level_style(self, level_name: str) -> Style:
        if level_name == "DEBUG":
            return Style(color="white", dim=True)
        if level_name == "INFO":
            return Style(color="blue", bold=True)
        if level_name == "WARNING":
            return Style(color="yellow", bold=True)
        if level_name in ("ERROR", "CRITICAL"):
            return Style(color="red", bold=True)
        return Style(color="cyan")


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging and structlog through one stderr Rich handler.

    Safe to call more than once; the root handlers are replaced each time.
    """
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}")

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(StderrRichHandler(markup=False, rich_tracebacks=False))
    root_logger.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False, pad_event=0),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
