"""
NoteShelf Backend — Request ID Middleware
===========================================

What:  Tags each request with a short correlation ID.
How:   Accepts the client's X-Request-ID when it looks like an ID (letters,
       digits, "-", "_", ".", at most 64 characters); anything else is
       replaced with a fresh 8-hex-digit ID. The value is stored in a
       ContextVar for loggers and exception handlers and echoed back in the
       X-Request-ID response header.

Error bodies only carry a message, so the header is how a client links a
failed call to the server log entry describing it. The ID is written into
every log line for the request, hence the character check.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,64}")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def pick_request_id(client_value: Optional[str]) -> str:
    """The client's ID if it is safe to log and echo, else a new one."""
    if client_value and _CLIENT_ID_RE.fullmatch(client_value):
        return client_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Sets request_id_var, request.state.request_id and the response header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = pick_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
