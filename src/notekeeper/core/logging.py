"""
Logging configuration for the NoteKeeper backend.

Console output is JSON (coloured text when ``debug`` is on), everything is
also written to rotating files under ``settings.log_dir``. Credentials are
masked by ``SensitiveDataFilter`` before any handler sees a record.
"""
import json
import logging
import logging.config
import re
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

from ..config import Settings, get_settings

# attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED_ATTRS = frozenset((
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName',
    'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'taskName', 'message', 'asctime',
))

SENSITIVE_KEYS = frozenset((
    'password', 'password_hash', 'access_token', 'refresh_token',
    'token', 'authorization', 'cookie',
))
REDACTED = '[REDACTED]'
_JWT_PATTERN = re.compile(r'eyJ[\w-]+\.[\w-]+\.[\w-]+')


class SensitiveDataFilter(logging.Filter):
    """Mask credentials in `extra` fields and JWTs embedded in messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key in SENSITIVE_KEYS.intersection(record.__dict__):
            setattr(record, key, REDACTED)

        if isinstance(record.msg, str) and _JWT_PATTERN.search(record.msg):
            record.msg = _JWT_PATTERN.sub(REDACTED, record.msg)
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line, extras nested under ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'source': f"{record.module}:{record.funcName}:{record.lineno}",
        }

        if record.exc_info and record.exc_info[0]:
            exc_type, exc_value, _ = record.exc_info
            log_entry['exception'] = {
                'type': exc_type.__name__,
                'message': str(exc_value),
                'traceback': self.formatException(record.exc_info),
            }

        extra = {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}
        if extra:
            log_entry['extra'] = extra

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # file handlers share the record, so colour a copy
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, '')
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        record.name = f"\033[90m{record.name}{self.RESET}"
        return super().format(record)


def get_log_level(level_str: Optional[str] = None) -> int:
    """Resolve a level name, falling back to INFO for unknown names."""
    level = logging.getLevelName((level_str or get_settings().log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def _rotating_file(path: Path, formatter: str, level: str) -> Dict[str, Any]:
    return {
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': path,
        'maxBytes': 10_000_000,  # 10MB
        'backupCount': 5,
        'formatter': formatter,
        'level': level,
        'filters': ['sensitive'],
    }


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """dictConfig schema for the given settings."""
    log_dir = Path(settings.log_dir)

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'filters': {
            'sensitive': {'()': SensitiveDataFilter},
        },
        'formatters': {
            'json': {'()': JSONFormatter},
            'colored': {
                '()': ColoredFormatter,
                'format': '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
                'datefmt': '%H:%M:%S',
            },
            'file': {
                'format': '%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'colored' if settings.debug else 'json',
                'stream': sys.stdout,
                'level': get_log_level(settings.log_level),
                'filters': ['sensitive'],
            },
            'file': _rotating_file(log_dir / 'notekeeper.log', 'file', 'DEBUG'),
            'error_file': _rotating_file(log_dir / 'error.log', 'json', 'ERROR'),
        },
        'loggers': {
            'notekeeper': {
                'handlers': ['console', 'file', 'error_file'],
                'level': 'DEBUG',
                'propagate': False,
            },
            'uvicorn': {'handlers': ['console'], 'level': 'INFO', 'propagate': False},
            'uvicorn.access': {'handlers': ['console'], 'level': 'INFO', 'propagate': False},
            'sqlalchemy': {'handlers': ['file'], 'level': 'WARNING', 'propagate': False},
        },
        'root': {
            'handlers': ['console', 'file'],
            'level': 'INFO',
        },
    }


def setup_logging() -> None:
    """Apply the logging configuration built from the current settings."""
    settings = get_settings()
    Path(settings.log_dir).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(settings))

    get_logger('logging').info("Logging system initialized", extra={
        'log_level': settings.log_level,
        'debug': settings.debug,
        'environment': settings.environment,
    })


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the notekeeper namespace."""
    return logging.getLogger(f"notekeeper.{name}")


def _header(scope, name: bytes) -> str:
    for key, value in scope.get('headers', []):
        if key == name:
            return value.decode('latin-1')
    return 'unknown'


class LoggingMiddleware:
    """ASGI middleware logging each request with its outcome, duration and caller."""

    def __init__(self, app, logger_name: str = "http"):
        self.app = app
        self.logger = get_logger(logger_name)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        request = {
            'request_id': uuid4().hex,
            'method': scope['method'],
            'path': scope['path'],
        }
        self.logger.info("HTTP Request", extra={
            **request,
            'client_ip': scope['client'][0] if scope.get('client') else 'unknown',
            'user_agent': _header(scope, b'user-agent'),
        })

        def elapsed_ms() -> float:
            return round((time.perf_counter() - start_time) * 1000, 2)

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                # claims are put on request.state by the auth dependency
                claims = scope.get('state', {}).get('user') or {}
                self.logger.info("HTTP Response", extra={
                    **request,
                    'status_code': message.get('status', 0),
                    'duration_ms': elapsed_ms(),
                    'user_id': claims.get('sub'),
                })
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            self.logger.error("HTTP Request Failed", extra={
                **request,
                'duration_ms': elapsed_ms(),
                'exception_type': type(exc).__name__,
            })
            raise
