"""
Logging setup for the analyzer.

Library modules only create module loggers; entry points (the Streamlit app,
the demo scripts) call setup_logging once.
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "INFO", use_rich: bool = True) -> None:
    """
    Configure the root logger.

    Args:
        level: DEBUG, INFO, WARNING or ERROR.
        use_rich: colored Rich output; plain stderr lines otherwise.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=Console(file=sys.stderr),
            level=numeric_level,
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
            log_time_format="[%H:%M:%S]",
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(levelname)-5s %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    handler.setLevel(numeric_level)
    root_logger.addHandler(handler)

    # matplotlib and PIL are chatty at DEBUG.
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured: level=%s, rich=%s", level, use_rich)
