"""Centralized logging configuration for collabgraph.

Library modules only create loggers (``logging.getLogger(__name__)``) and
log events with structured ``extra`` fields. Entry points call
configure_logging() once.

Logging Levels:
- DEBUG: Individual mutations (employee added, interaction recorded)
- INFO: Document loads and saves
- WARNING: Records skipped while loading a document, index drift
- ERROR: Failures that abort a command
"""

import logging
import os

LOG_LEVEL_ENV_VAR = "COLLABGRAPH_LOG_LEVEL"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    Converts full module paths to short component names:
    - collabgraph.graph.document -> graph
    - collabgraph.cli.app -> cli
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "collabgraph":
            record.component = parts[1]
        else:
            record.component = parts[0]
        return super().format(record)


def resolve_level(level: str | None = None) -> str:
    """Pick a log level from the argument, the environment, or INFO."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    level = level.upper()
    if level not in VALID_LEVELS:
        level = "INFO"
    return level


def configure_logging(
    level: str | None = None,
    use_rich: bool = False,
) -> None:
    """Configure logging for collabgraph.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses COLLABGRAPH_LOG_LEVEL env var or INFO.
        use_rich: Use Rich handler for colorful console output.
    """
    log_level = getattr(logging, resolve_level(level))

    handler: logging.Handler
    if use_rich:
        from rich.logging import RichHandler

        handler = RichHandler(
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            ComponentFormatter(
                "%(asctime)s | %(levelname)-8s | %(component)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    logging.basicConfig(
        level=log_level,
        handlers=[handler],
        force=True,
    )
