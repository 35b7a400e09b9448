# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""
领域层：

- claim: 当前登录用户的身份信息（由会话层注入，这里只做承载）
"""
from . import claim  # noqa: F401
from .claim import Claim

__all__ = ["claim", "Claim"]
