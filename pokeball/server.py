"""TCP entry point: load assets once, then serve a session per connection."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from pokeball.bootstrap import AppContext, create_app
from pokeball.config import load_settings
from pokeball.session import Session
from pokeball.ui.glyphs import AssetError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DB_WORKERS = 4


async def serve(ctx: AppContext, executor: ThreadPoolExecutor) -> asyncio.AbstractServer:
    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        await Session(reader, writer, ctx, executor).run()

    settings = ctx.settings
    server = await asyncio.start_server(handle, settings.host, settings.port)
    for sock in server.sockets or ():
        logger.info("listening on %s", sock.getsockname())
    return server


async def _run(ctx: AppContext):
    executor = ThreadPoolExecutor(max_workers=DB_WORKERS, thread_name_prefix="pokedex-db")
    try:
        server = await serve(ctx, executor)
        async with server:
            await server.serve_forever()
    finally:
        executor.shutdown(wait=True)


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = load_settings(argv)
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    try:
        ctx = create_app(settings)
    except AssetError as exc:
        logger.error("asset loading failed: %s (data/README.md lists the sprite files)", exc)
        return 1
    logger.info(
        "serving %dx%d frames in %s mode, %d species with art",
        settings.width,
        settings.height,
        settings.color_mode,
        len(ctx.assets),
    )
    try:
        asyncio.run(_run(ctx))
    except KeyboardInterrupt:
        logger.info("shutting down")
    return 0
