# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""模板渲染

into_response 是整个展示层的兜底：模板渲染失败时直接返回 500 + 错误文本，
不再走 exception_handlers，避免错误页自身出错时递归。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, ClassVar, Dict, Protocol

from jinja2 import Environment, FileSystemLoader, select_autoescape
from starlette.responses import Response

from innforum.web.page import PageData

logger = logging.getLogger(__name__)

HTML = "text/html; charset=utf-8"

TEMPLATES_ROOT = Path(__file__).resolve().parent.parent / "templates"

env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_ROOT)),
    autoescape=select_autoescape(["html", "xml"]),
)


class Renderable(Protocol):
    def render(self) -> str: ...


@dataclass
class TemplatePage:
    """以 dataclass 字段作为模板上下文的页面"""

    template_name: ClassVar[str]

    def context(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def render(self) -> str:
        return env.get_template(self.template_name).render(**self.context())


@dataclass
class ErrorPage(TemplatePage):
    template_name: ClassVar[str] = "error.html"

    page_data: PageData
    status: str
    error: str


def into_response(page: Renderable, content_type: str) -> Response:
    try:
        body = page.render()
    except Exception as err:  # noqa: BLE001
        logger.warning("render failed: %s", err)
        return Response(content=str(err), status_code=500)
    return Response(content=body, status_code=200, headers={"content-type": content_type})
