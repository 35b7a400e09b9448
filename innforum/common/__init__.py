# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""通用基础设施（错误/日志/trace/退出信号 等）

约定：
- Router 不处理状态码：失败统一通过 AppError 子类抛出，由全局异常处理渲染错误页
- trace_id 通过 middleware 注入，并写入日志，便于线上排障
"""

from __future__ import annotations
