# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Optional

from fastapi import Header


def get_referer(referer: Optional[str] = Header(None)) -> Optional[str]:
    """返回 Referer 原文，去掉首尾引号；未携带时为 None"""
    if referer is None:
        return None
    return referer.strip().strip('"')
