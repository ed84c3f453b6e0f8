"""Unified logging configuration for colordist entrypoints.

Provides consistent logging for the CLI and embedding applications:
    - Console handler (stderr) and optional file handler
    - JSON output mode for ingestion
    - Contextual fields (app, metric, ...) via contextvars
    - Warning capture (Python warnings → logging)

Public API:
    setup_logging(**cfg.logging.model_dump(), context={"app": "compare"})
    get_logger(name)
    push_context(metric="cie2000")
    pop_context(keys=["metric"])

Format examples:
    Human: 2026-10-17T13:45:12.345Z | INFO     | app=compare | ΔE00=82.07
    JSON: {"t":"2026-10-17T13:45:12.345Z","lvl":"INFO","app":"compare","msg":"..."}

Library modules only call logging.getLogger(__name__); nothing in
colordist.colors or colordist.utils.color configures handlers.
Idempotent: repeated setup_logging() calls don't duplicate handlers.
"""

import contextvars
import json as jsonlib
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


_context_var = contextvars.ContextVar('colordist_logging_context', default={})

# Handlers installed by setup_logging, removed again on the next call
_installed_handlers: List[logging.Handler] = []

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ContextFormatter(logging.Formatter):
    """Formatter that appends contextual fields.

    Supports:
        - Human-readable format with colors (optional)
        - JSON format for machine ingestion
    """

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m'
    }

    def __init__(self, fmt_mode: str = "human", use_color: bool = True):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown format mode: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get({})
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)

        if self.fmt_mode == "json":
            return self._format_json(record, ts, context)
        return self._format_human(record, ts, context)

    def _format_json(self, record: logging.LogRecord, ts: datetime, context: dict) -> str:
        log_dict = {
            't': ts.isoformat(),
            'lvl': record.levelname,
            'name': record.name,
            'pid': os.getpid(),
            'msg': record.getMessage()
        }
        log_dict.update(context)
        if record.exc_info:
            log_dict['exc'] = self.formatException(record.exc_info)
        return jsonlib.dumps(log_dict, default=str)

    def _format_human(self, record: logging.LogRecord, ts: datetime, context: dict) -> str:
        ts_str = ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.COLORS['RESET']}"

        parts = [ts_str, '|', level, '|']
        context_str = ' '.join(f"{k}={v}" for k, v in context.items())
        if context_str:
            parts.extend([context_str, '|'])
        parts.append(record.getMessage())

        line = ' '.join(parts)
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    capture_warnings: bool = True,
    context: Optional[Dict[str, Any]] = None,
) -> List[logging.Handler]:
    """Configure root logger (idempotent).

    Parameters
    ----------
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"
    log_file : str, optional
        Log file path; None for no file logging
    json : bool
        Use JSON lines instead of human-readable lines, default False
    color : bool
        Use ANSI colors in console output, default True (TTY only)
    to_stderr : bool
        Log to stderr, default True
    capture_warnings : bool
        Route Python warnings to logging, default True
    context : dict, optional
        Initial contextual fields (e.g., {"app": "compare"})

    Returns
    -------
    list[logging.Handler]
        Handlers installed on the root logger

    Raises
    ------
    ValueError
        If log_level is not a known level name
    """
    level_name = log_level.upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {log_level}. Use one of {LOG_LEVELS}.")

    root = logging.getLogger()
    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root.setLevel(getattr(logging, level_name))
    fmt_mode = "json" if json else "human"

    if to_stderr:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ContextFormatter(fmt_mode, use_color=color))
        _installed_handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(ContextFormatter(fmt_mode, use_color=False))
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        root.addHandler(handler)

    if context:
        push_context(**context)

    if capture_warnings:
        logging.captureWarnings(True)

    return list(_installed_handlers)


def get_logger(name: str) -> logging.Logger:
    """Get logger by name (typically __name__)."""
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Update root logger level at runtime.

    Raises
    ------
    ValueError
        If level is not a known level name
    """
    level_name = level.upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}. Use one of {LOG_LEVELS}.")
    logging.getLogger().setLevel(getattr(logging, level_name))


def push_context(**kwargs) -> None:
    """Add contextual fields to all subsequent log records.

    Context is thread-local (contextvars). Fields appear in every
    message until popped.

    Examples
    --------
    >>> push_context(app="compare")
    >>> logger.info("Started")  # → "... | app=compare | Started"
    """
    current = _context_var.get({})
    _context_var.set({**current, **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove contextual fields; clears all context when keys is None."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get({}))
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)


def get_context() -> Dict[str, Any]:
    """Return a copy of the current contextual fields."""
    return dict(_context_var.get({}))
