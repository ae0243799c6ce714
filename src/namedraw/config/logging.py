"""Log routing for the namedraw CLI.

Everything goes to stderr so stdout stays reserved for results. Three
sources feed it:

- draw-machine events (``draw.start``, ``draw.winner``, ``roster.saved``)
  from ``namedraw.services.draw``, shown with ``--verbose``;
- persistence failures from ``namedraw.infrastructure.store``, always
  shown, even with ``--quiet``, because the session is then memory-only;
- plugin loading problems from ``namedraw.plugins``.

``--log-json`` swaps the console renderer for one JSON object per line.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

STORE_LOGGER = "namedraw.infrastructure.store"


def logger_levels(*, verbose: bool = False, quiet: bool = False) -> dict[str, int]:
    """Per-logger thresholds for a CLI invocation.

    ``--verbose`` wins over ``--quiet``; the store logger never goes
    above WARNING.
    """
    if verbose:
        ours = logging.DEBUG
    elif quiet:
        ours = logging.ERROR
    else:
        ours = logging.WARNING
    return {
        "namedraw": ours,
        STORE_LOGGER: min(ours, logging.WARNING),
        "sqlalchemy": logging.WARNING,
    }


def add_component(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
    """Tag records with the namedraw layer that emitted them (``draw``, ``store``...)."""
    name = event_dict.get("logger", "")
    if name.startswith("namedraw."):
        event_dict.setdefault("component", name.rsplit(".", 1)[-1])
    return event_dict


def _renderer(log_json: bool, stream: IO[str]) -> Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Route structlog and stdlib records through one stderr handler.

    Safe to call more than once; the previous handler is replaced.
    """
    stream = stream or sys.stderr
    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_component,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json, stream),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    for name, level in logger_levels(verbose=verbose, quiet=quiet).items():
        logging.getLogger(name).setLevel(level)
