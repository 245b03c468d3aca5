"""Logging setup shared by applications that embed rastercore.

The library itself only calls logging.getLogger(__name__) and logs at DEBUG;
nothing is emitted until an application configures the root logger here.

Provides:
    - setup_logging(): idempotent root logger configuration
    - get_logger(): named logger lookup
    - push_context() / pop_context(): fields appended to every record
    - ContextFormatter: human-readable or JSON-lines records

Format examples:
    Human: 2026-10-18T09:14:03.512Z | DEBUG    | app=preview size=512 | render: 4.21 ms
    JSON: {"t":"2026-10-18T09:14:03.512Z","lvl":"DEBUG","size":512,"msg":"..."}

Context is held in a contextvar, so each thread or task sees its own fields.
"""

import contextvars
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


_context_var = contextvars.ContextVar('rastercore_logging_context', default={})

# Handlers installed by setup_logging(), removed again on the next call
_installed_handlers: List[logging.Handler] = []


class ContextFormatter(logging.Formatter):
    """Formatter that appends contextual fields to each record.

    Parameters
    ----------
    fmt_mode : str
        "human" (default) or "json"
    use_color : bool
        Colorize the level name; only honored when stderr is a TTY
    """

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt_mode: str = "human", use_color: bool = True):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown fmt_mode: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get({})
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        ts_str = ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'

        if self.fmt_mode == "json":
            payload = {'t': ts_str, 'lvl': record.levelname, 'name': record.name}
            payload.update(context)
            payload['msg'] = record.getMessage()
            if record.exc_info:
                payload['exc'] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str)

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{self.LEVEL_COLORS.get(record.levelname, '')}{level}{self.RESET}"

        parts = [ts_str, '|', level, '|']
        if context:
            parts.append(' '.join(f"{k}={v}" for k, v in context.items()))
            parts.append('|')
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
    context: Optional[Dict[str, Any]] = None,
) -> List[logging.Handler]:
    """Configure the root logger (idempotent).

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    log_file : str, optional
        Also write records to this file (parent dirs are created)
    json : bool
        JSON-lines output instead of human-readable, default False
    color : bool
        ANSI colors on the console handler, default True
    to_stderr : bool
        Attach a console handler on stderr, default True
    context : dict, optional
        Initial contextual fields (e.g. {"app": "preview"})

    Returns
    -------
    list[logging.Handler]
        Handlers attached by this call

    Raises
    ------
    ValueError
        If log_level is not a known level name

    Examples
    --------
    >>> setup_logging("DEBUG", context={"app": "preview"})
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    root = logging.getLogger()
    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root.setLevel(level)
    fmt_mode = "json" if json else "human"

    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter(fmt_mode, use_color=color))
        _installed_handlers.append(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding='utf-8')
        file_handler.setFormatter(ContextFormatter(fmt_mode, use_color=False))
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        root.addHandler(handler)

    if context:
        push_context(**context)

    return list(_installed_handlers)


def get_logger(name: str) -> logging.Logger:
    """Get logger by name (typically __name__)."""
    return logging.getLogger(name)


def push_context(**kwargs) -> None:
    """Add contextual fields to all subsequent records in this context.

    Examples
    --------
    >>> push_context(app="preview", size=512)
    >>> logger.info("Rendered")  # → "... | app=preview size=512 | Rendered"
    """
    current = _context_var.get({})
    _context_var.set({**current, **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove contextual fields; clears everything when keys is None."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get({}))
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)
