# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Dict, Optional, Type, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from innforum.common import errors
from innforum.common.errors import AppError
from innforum.infra.config import SIGNIN_PATH, Settings, SiteConfig, settings as default_settings
from innforum.web.page import build_page_data
from innforum.web.render import HTML, ErrorPage, into_response

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Redirect:
    location: str


Outcome = Union[int, Redirect]

# 每个 AppError 子类恰好一项；未登录直接跳转登录页，不渲染错误页
STATUS_TABLE: Dict[Type[AppError], Outcome] = {
    errors.CaptchaError: 400,
    errors.NameExists: 400,
    errors.InnCreateLimit: 400,
    errors.UsernameInvalid: 400,
    errors.WrongPassword: 400,
    errors.ImageError: 400,
    errors.Locked: 400,
    errors.Hidden: 400,
    errors.ReadOnly: 400,
    errors.ValidationFailed: 400,
    errors.NoJoinedInn: 400,
    errors.FormRejection: 400,
    errors.NotFound: 404,
    errors.WriteInterval: 429,
    errors.NonLogin: Redirect(SIGNIN_PATH),
    errors.Unauthorized: 401,
    errors.Banned: 403,
    errors.InternalError: 500,
    errors.StorageError: 500,
    errors.IoError: 500,
    errors.Custom: 500,
}


def status_for(exc: AppError) -> Outcome:
    return STATUS_TABLE.get(type(exc), 500)


def status_line(status_code: int) -> str:
    """与 http 状态行一致，例如 '404 Not Found'"""
    try:
        return f"{status_code} {HTTPStatus(status_code).phrase}"
    except ValueError:
        return str(status_code)


def render_error_page(status_code: int, error: str, conf: Optional[Settings] = None) -> Response:
    conf = conf or default_settings
    status = status_line(status_code)
    logger.error("%s, %s", status, error)

    page_data = build_page_data("Error", SiteConfig.from_settings(conf), None, False, settings=conf)
    response = into_response(ErrorPage(page_data=page_data, status=status, error=error), HTML)
    # 渲染失败时保留兜底的 500
    if response.status_code == 200:
        response.status_code = status_code
    return response


def present_error(exc: AppError, conf: Optional[Settings] = None) -> Response:
    outcome = status_for(exc)
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.location, status_code=303)
    return render_error_page(outcome, str(exc), conf)


def _settings_of(request: Request) -> Optional[Settings]:
    return getattr(request.app.state, "settings", None)


async def app_error_handler(request: Request, exc: AppError) -> Response:
    return present_error(exc, _settings_of(request))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == 404:
        return present_error(errors.NotFound(), _settings_of(request))

    # 405 等框架层错误：沿用原状态码，页面样式保持一致
    response = render_error_page(exc.status_code, str(exc.detail), _settings_of(request))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    return present_error(errors.FormRejection(detail=_summarize(exc.errors())), _settings_of(request))


async def unhandled_error_handler(request: Request, exc: Exception) -> Response:
    logger.exception("Unhandled error")
    return present_error(errors.InternalError(detail=type(exc).__name__), _settings_of(request))


def _summarize(items) -> str:
    parts = []
    for item in items:
        loc = ".".join(str(p) for p in item.get("loc", ()) if p not in ("body", "query"))
        parts.append(f"{loc}: {item.get('msg', '')}" if loc else str(item.get("msg", "")))
    return "; ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
