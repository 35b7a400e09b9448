# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import RedirectResponse, Response

from innforum.infra.config import HOME_PATH

router = APIRouter(tags=["meta"])

CSS_ROOT = Path(__file__).resolve().parent.parent / "static" / "css"
CSS_FILES = ("base.css", "main.css")

STYLE_HEADERS = {
    "content-type": "text/css",
    "cache-control": "public, max-age=1209600, s-maxage=86400",
}

_css_lock = threading.Lock()
_css: Optional[bytes] = None


def load_css() -> bytes:
    """首次访问时拼接样式表，之后一直复用"""
    global _css
    if _css is None:
        with _css_lock:
            if _css is None:
                parts = [(CSS_ROOT / name).read_text(encoding="utf-8") for name in CSS_FILES]
                _css = "\n".join(parts).encode("utf-8")
    return _css


@router.get("/")
async def home() -> RedirectResponse:
    return RedirectResponse(HOME_PATH, status_code=303)


@router.get("/static/style.css")
async def style() -> Response:
    return Response(content=load_css(), headers=STYLE_HEADERS)
