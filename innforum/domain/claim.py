# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Claim:
    """会话中解析出的用户身份"""
    uid: int
    username: str
    role: int = 10
    session_id: str = ""
