# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar, Token
from typing import Optional


_trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="-")

# 外部传入的 X-Request-Id 只接受这些字符，避免日志注入
_TRACE_ID_RE = re.compile(r"^[A-Za-z0-9._\-]{1,64}$")


def new_trace_id() -> str:
    return uuid.uuid4().hex


def accept_trace_id(raw: Optional[str]) -> str:
    """优先使用上游传入的 request id，不合法时重新生成"""
    if raw and _TRACE_ID_RE.match(raw):
        return raw
    return new_trace_id()


def set_trace_id(trace_id: str) -> Token:
    return _trace_id_ctx.set(trace_id or "-")


def reset_trace_id(token: Token) -> None:
    _trace_id_ctx.reset(token)


def get_trace_id() -> str:
    return _trace_id_ctx.get() or "-"
