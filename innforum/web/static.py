# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""静态目录服务

- 只解析文件，目录与缺失文件一律跳转登录页（不暴露 404）
- 客户端接受 gzip 且存在 <path>.gz 时优先返回预压缩文件
- 文件存在但读取失败时返回 500 + 错误文本
"""

from __future__ import annotations

import errno
import logging
import mimetypes
import os
import stat
from typing import Optional, Tuple

import anyio.to_thread
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException
from starlette.responses import FileResponse, Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

from innforum.infra.config import SIGNIN_PATH

logger = logging.getLogger(__name__)


def _ensure_readable(path: str) -> None:
    with open(path, "rb") as fh:
        fh.read(1)


def internal_error(err: OSError) -> Response:
    logger.error("static file error: %s", err)
    return PlainTextResponse(f"Unhandled internal error: {err}", status_code=500)


def accepts_gzip(header: str) -> bool:
    """按 Accept-Encoding 的 q 值判断是否接受 gzip，q=0 视为拒绝"""
    gzip_q: Optional[float] = None
    star_q: Optional[float] = None
    for item in header.split(","):
        name, _, params = item.strip().partition(";")
        name = name.strip().lower()
        q = 1.0
        for param in params.split(";"):
            key, _, value = param.strip().partition("=")
            if key.strip().lower() == "q":
                try:
                    q = float(value)
                except ValueError:
                    q = 0.0
        if name == "gzip":
            gzip_q = q
        elif name == "*":
            star_q = q
    if gzip_q is not None:
        return gzip_q > 0
    return star_q is not None and star_q > 0


class SigninFallbackStaticFiles(StaticFiles):
    def __init__(self, *args, fallback: str = SIGNIN_PATH, **kwargs) -> None:
        kwargs.setdefault("html", False)
        super().__init__(*args, **kwargs)
        self._fallback = fallback

    async def get_response(self, path: str, scope: Scope) -> Response:  # type: ignore[override]
        # 先自行解析一次：StaticFiles 会把 PermissionError 变成 401，这里要的是 500 + 错误文本
        try:
            await anyio.to_thread.run_sync(self.lookup_path, path)
        except OSError as err:
            if err.errno != errno.ENAMETOOLONG:
                return internal_error(err)

        try:
            response = await self._gzip_response(path, scope)
            if response is None:
                response = await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code == 404:
                return RedirectResponse(self._fallback, status_code=303)
            raise
        except OSError as err:
            return internal_error(err)

        if isinstance(response, FileResponse):
            try:
                await anyio.to_thread.run_sync(_ensure_readable, response.path)
            except OSError as err:
                return internal_error(err)
        return response

    async def _gzip_response(self, path: str, scope: Scope) -> Optional[Response]:
        if scope["method"] not in ("GET", "HEAD"):
            return None
        if not accepts_gzip(Headers(scope=scope).get("accept-encoding", "")):
            return None

        found = await anyio.to_thread.run_sync(self._lookup_pair, path)
        if found is None:
            return None
        original, (gz_path, gz_stat) = found
        response = self.file_response(gz_path, gz_stat, scope)
        response.headers["content-type"] = mimetypes.guess_type(original)[0] or "text/plain"
        response.headers["content-encoding"] = "gzip"
        response.headers["vary"] = "accept-encoding"
        return response

    def _lookup_pair(self, path: str) -> Optional[Tuple[str, Tuple[str, os.stat_result]]]:
        if not path or path.endswith(".gz"):
            return None
        full_path, stat_result = self.lookup_path(path)
        if not (stat_result and stat.S_ISREG(stat_result.st_mode)):
            return None
        gz_path, gz_stat = self.lookup_path(path + ".gz")
        if not (gz_stat and stat.S_ISREG(gz_stat.st_mode)):
            return None
        return full_path, (gz_path, gz_stat)


def serve_dir(directory: str) -> SigninFallbackStaticFiles:
    """挂载一个静态目录，目录不存在时自动创建"""
    os.makedirs(directory, exist_ok=True)
    return SigninFallbackStaticFiles(directory=directory)
