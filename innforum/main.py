# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from innforum.api import meta as meta_api
from innforum.common.exception_handlers import register_error_handlers
from innforum.common.logging import setup_logging
from innforum.common.middlewares import TraceIdMiddleware
from innforum.infra.config import Settings, settings as default_settings
from innforum.web.static import serve_dir


def create_app(conf: Optional[Settings] = None) -> FastAPI:
    conf = conf or default_settings
    setup_logging(conf.LOG_LEVEL)

    app = FastAPI(
        title=conf.SITE_NAME,
        version=conf.VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = conf

    # ---------- middlewares / handlers ----------

    app.add_middleware(TraceIdMiddleware)
    register_error_handlers(app)

    # ---------- routes ----------

    app.include_router(meta_api.router)

    # 静态目录：缺失文件跳转登录页
    for path, directory, _ in conf.SERVE_DIR:
        app.mount(path, serve_dir(directory), name=path.strip("/").replace("/", "_") or "root")

    return app
