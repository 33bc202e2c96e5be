"""Environment-driven settings and logging setup for the CLI and REPL."""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

LOG_LEVEL_ENV = "FORMULA_EVAL_LOG_LEVEL"
DEBUG_PY_TRACE_ENV = "FORMULA_EVAL_DEBUG_PY_TRACE"

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    debug_py_trace: bool = False


def env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def debug_py_trace_enabled() -> bool:
    return env_flag(DEBUG_PY_TRACE_ENV)


def load_settings() -> Settings:
    return Settings(
        log_level=os.environ.get(LOG_LEVEL_ENV, "WARNING").strip().upper() or "WARNING",
        debug_py_trace=debug_py_trace_enabled(),
    )


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for an entry point.

    Library code only creates module loggers; handlers are installed here.
    """
    name = (level or load_settings().log_level).upper()
    numeric_level = getattr(logging, name, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger(__name__).debug("Logging initialized at %s level", logging.getLevelName(numeric_level))
