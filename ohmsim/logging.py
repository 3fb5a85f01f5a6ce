"""Logging configuration for ohmsim.

Records emitted while a tick is being solved carry the simulation time of
that tick (``record.sim_time``), and the package formatter prefixes it:

    [t=0.0125s] Solver diverged, tick discarded: ...

Provides two logging modes:
- Default: WARNING level only (quiet)
- Debug tracing: DEBUG level with flush, one line per solve call

Usage:
    from ohmsim.logging import tick_logger, enable_debug_logging

    enable_debug_logging()
    tick_logger(sim_time).debug("%d unknowns", size)
"""

import logging
import sys

logger = logging.getLogger("ohmsim")


class TickFormatter(logging.Formatter):
    """Formatter that prefixes records carrying a ``sim_time`` with the tick time."""

    def format(self, record):
        text = super().format(record)
        sim_time = getattr(record, "sim_time", None)
        if sim_time is None:
            return text
        return f"[t={sim_time:.6g}s] {text}"


class TickAdapter(logging.LoggerAdapter):
    """Adapter binding the time of the tick being solved to every record."""

    def process(self, msg, kwargs):
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("sim_time", self.extra["sim_time"])
        kwargs["extra"] = extra
        return msg, kwargs


def tick_logger(sim_time: float) -> TickAdapter:
    """Return the package logger bound to the tick at ``sim_time``."""
    return TickAdapter(logger, {"sim_time": sim_time})


# Default: WARNING level only (quiet operation)
logger.setLevel(logging.WARNING)

if not logger.handlers:
    _default_handler = logging.StreamHandler(sys.stdout)
    _default_handler.setLevel(logging.WARNING)
    _default_handler.setFormatter(TickFormatter("%(message)s"))
    logger.addHandler(_default_handler)


class FlushingHandler(logging.StreamHandler):
    """StreamHandler that flushes after every emit."""

    def emit(self, record):
        super().emit(record)
        self.flush()


def enable_debug_logging():
    """Enable DEBUG level logging with immediate flush.

    Every solve call then reports its system size and iteration count.
    """
    logger.setLevel(logging.DEBUG)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = FlushingHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(TickFormatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)


def set_log_level(level: int):
    """Set the logging level.

    Args:
        level: logging.DEBUG, logging.INFO, logging.WARNING, etc.
    """
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
