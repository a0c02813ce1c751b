from __future__ import annotations

import json
import logging
from time import perf_counter
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

logger = logging.getLogger("brewguide.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id

        started = perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(json.dumps(_payload("request_error", request, request_id, 500, started)))
            response = JSONResponse(
                status_code=500,
                content={"detail": "Internal server error", "request_id": request_id},
            )
        else:
            payload = _payload("request_completed", request, request_id, response.status_code, started)
            if response.status_code >= 500:
                logger.error(json.dumps(payload))
            elif response.status_code >= 400:
                logger.warning(json.dumps(payload))
            else:
                logger.info(json.dumps(payload))

        response.headers["X-Request-ID"] = request_id
        return response


def _payload(event: str, request: Request, request_id: str, status_code: int, started: float) -> dict[str, object]:
    return {
        "event": event,
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "duration_ms": round((perf_counter() - started) * 1000, 2),
    }
