"""structlog setup and request-scoped log context."""

import logging
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Libraries that are chatty at INFO. uvicorn's access log is replaced by
# the request_completed event from the logging-context middleware.
QUIET_LOGGERS: dict[str, int] = {
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "asyncpg": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def _renderer(debug: bool) -> structlog.typing.Processor:
    if debug:
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer()


def setup_logging(debug: bool = False, level: str = "INFO") -> None:
    """Configure structlog and route stdlib logging to stdout.

    Args:
        debug: Colored console output at DEBUG level. Otherwise JSON lines.
        level: Root level name when not in debug mode.
    """
    log_level = logging.DEBUG if debug else logging.getLevelNamesMapping().get(
        level.upper(), logging.INFO
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(debug),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(quiet_level, log_level))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None, **fields: str) -> None:
    """Bind the correlation id (and any extra request fields) to later log calls."""
    if request_id:
        bind_contextvars(request_id=request_id)
    if fields:
        bind_contextvars(**fields)


def bind_user_context(user_id: str, email: str | None = None) -> None:
    """Bind the authenticated caller to all subsequent log calls.

    The email is only bound when the token carried one; it is not looked up.
    """
    bind_contextvars(user_id=user_id)
    if email:
        bind_contextvars(user_email=email)


def clear_request_context() -> None:
    clear_contextvars()
