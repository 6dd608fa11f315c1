"""
ITR API: Access Log Middleware
==============================

What:  One `itr_api.access` line per request to the employee API.
How:   Times the downstream call and, once the response is built, logs

           <METHOD> <route template> <status> <ms> [<request id>] id=<employee id>

       The route template (`/v1/find/{employee_id}`) keeps lines for
       different records groupable; the concrete employee ID, when the path
       carries one, is logged separately. 5xx lines are ERROR, 4xx WARNING
       and everything else INFO. A request that escapes every exception
       handler is logged at ERROR with status 500 and re-raised.

Never logged: request bodies and query strings (PAN numbers, salaries and
taxable income). `/health` is skipped; orchestrators poll it.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from itr_api.middleware.request_id import request_id_var

logger = logging.getLogger("itr_api.access")

UNLOGGED_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _route_template(request: Request) -> str:
    """The matched route's path pattern, or the raw path for unmatched requests."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access logging keyed by route template and employee ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, started)
            raise

        self._log(request, response.status_code, started)
        return response

    def _log(self, request: Request, status: int, started: float) -> None:
        elapsed_ms = (time.perf_counter() - started) * 1000
        route = _route_template(request)
        employee_id: Optional[str] = request.path_params.get("employee_id")
        rid = request_id_var.get("")

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s]%s",
            request.method,
            route,
            status,
            elapsed_ms,
            rid,
            f" id={employee_id[:32]}" if employee_id else "",
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "status": status,
                "duration_ms": round(elapsed_ms, 2),
                "employee_id": employee_id,
                "client_ip": request.client.host if request.client else None,
            },
        )
