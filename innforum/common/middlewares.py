# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from innforum.common.trace import accept_trace_id, reset_trace_id, set_trace_id

TRACE_HEADER_IN = "X-Request-Id"
TRACE_HEADER_OUT = "X-Trace-Id"


class TraceIdMiddleware(BaseHTTPMiddleware):
    """每个请求绑定一个 trace_id，错误日志与响应头都能对上"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        trace_id = accept_trace_id(request.headers.get(TRACE_HEADER_IN))
        token = set_trace_id(trace_id)
        try:
            response: Response = await call_next(request)
        finally:
            reset_trace_id(token)
        response.headers[TRACE_HEADER_OUT] = trace_id
        return response
