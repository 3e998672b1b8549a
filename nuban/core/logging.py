from __future__ import annotations

import logging
import sys
import time
import uuid
from typing import Any, Dict

import structlog
from fastapi import Request

REQUEST_ID_HEADER = "x-request-id"


def _add_log_level(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    event_dict["level"] = method_name
    return event_dict


def configure_logging(env: str = "development", debug: bool = False) -> None:
    """Configure structlog to write to stdout.

    Development gets the colored console renderer, staging and production
    get one JSON object per line.
    """
    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _add_log_level,
        timestamper,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer: Any
    if env == "development":
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


async def request_id_middleware(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Tag every log line of a request with its id and log one access line.

    The id comes from the ``X-Request-ID`` header when the caller sends one
    and is echoed back on the response. Server errors are logged at warning
    level; an exception escaping the app is logged and re-raised.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    access_logger = structlog.get_logger("nuban.access")
    started = time.perf_counter()

    with structlog.contextvars.bound_contextvars(
        request_id=request_id, method=request.method, path=request.url.path
    ):
        try:
            response = await call_next(request)
        except Exception:
            access_logger.exception("request.failed", elapsed_ms=_elapsed_ms(started))
            raise

        log = access_logger.warning if response.status_code >= 500 else access_logger.info
        log("request.completed", status=response.status_code, elapsed_ms=_elapsed_ms(started))

    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
