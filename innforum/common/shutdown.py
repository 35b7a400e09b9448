# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""优雅退出

SIGINT 与 SIGTERM 谁先到算谁，另一路直接丢弃。
不支持 SIGTERM 的平台上用一个永不完成的 future 占位，竞争逻辑保持不变。
停止接收新请求、等待在途请求结束由调用方（server.serve）负责。
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from typing import Awaitable, Callable, List

logger = logging.getLogger(__name__)

SHUTDOWN_NOTICE = "signal received, starting graceful shutdown"

HAS_TERMINATE = sys.platform != "win32" and hasattr(signal, "SIGTERM")


def _signal_future(sig: int, cleanups: List[Callable[[], None]]) -> "asyncio.Future[None]":
    loop = asyncio.get_running_loop()
    fut: asyncio.Future[None] = loop.create_future()

    def _fire() -> None:
        if not fut.done():
            fut.set_result(None)

    try:
        loop.add_signal_handler(sig, _fire)
    except (NotImplementedError, RuntimeError):
        # Windows 的事件循环不支持 add_signal_handler，退回 signal.signal
        previous = signal.signal(sig, lambda *_: loop.call_soon_threadsafe(_fire))
        cleanups.append(lambda: signal.signal(sig, previous))
    else:
        cleanups.append(lambda: loop.remove_signal_handler(sig))
    return fut


def interrupt(cleanups: List[Callable[[], None]]) -> "asyncio.Future[None]":
    return _signal_future(signal.SIGINT, cleanups)


def terminate(cleanups: List[Callable[[], None]]) -> "asyncio.Future[None]":
    if not HAS_TERMINATE:
        return asyncio.get_running_loop().create_future()
    return _signal_future(signal.SIGTERM, cleanups)


async def first_completed(*aws: Awaitable[object]) -> None:
    """等待任意一个完成，其余取消；先完成的一方若抛异常则原样抛出"""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            task.result()
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()


async def shutdown_signal() -> None:
    cleanups: List[Callable[[], None]] = []
    try:
        await first_completed(interrupt(cleanups), terminate(cleanups))
    finally:
        for cleanup in cleanups:
            cleanup()

    logger.info(SHUTDOWN_NOTICE)
    print(SHUTDOWN_NOTICE)
