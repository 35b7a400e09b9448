# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Iterator, Optional

import uvicorn

from innforum.common.shutdown import shutdown_signal
from innforum.infra.config import Settings, settings as default_settings
from innforum.main import create_app

logger = logging.getLogger(__name__)


class ManagedServer(uvicorn.Server):
    """信号由 shutdown_signal 统一处理，uvicorn 自身不再安装 handler"""

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield

    def install_signal_handlers(self) -> None:
        pass


async def serve(conf: Optional[Settings] = None) -> None:
    conf = conf or default_settings
    app = create_app(conf)
    server = ManagedServer(
        uvicorn.Config(app, host=conf.HOST, port=conf.PORT, log_config=None)
    )
    logger.info("listening on http://%s:%s", conf.HOST, conf.PORT)

    serving = asyncio.ensure_future(server.serve())
    stopping = asyncio.ensure_future(shutdown_signal())
    await asyncio.wait({serving, stopping}, return_when=asyncio.FIRST_COMPLETED)
    if not stopping.done():
        stopping.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await stopping
    # 停止 accept，等待在途请求处理完
    server.should_exit = True
    await serving


def main() -> None:
    asyncio.run(serve())


if __name__ == "__main__":
    main()
