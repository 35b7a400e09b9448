# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""页面与请求边界：页面元数据、模板渲染、表单校验、静态目录"""

from __future__ import annotations
