"""One connected terminal: input reader, tick loop, persistence hand-off."""

import asyncio
import logging
import sqlite3
from concurrent.futures import Executor
from typing import Optional

from pokeball.capture import set_notice
from pokeball.commands.keymap import is_quit
from pokeball.commands.router import handle_command
from pokeball.config import TICK_SECONDS
from pokeball.loop import tick
from pokeball.state import SessionState, new_session
from pokeball.ui.ansi import ENTER_SEQUENCE, RESTORE_SEQUENCE

logger = logging.getLogger(__name__)

READ_ERRORS = (ConnectionError, OSError, UnicodeDecodeError, ValueError, asyncio.IncompleteReadError)
WRITE_ERRORS = (ConnectionError, OSError)


class Session:
    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        ctx,
        executor: Optional[Executor] = None,
        tick_seconds: float = TICK_SECONDS,
        seed: Optional[int] = None,
    ):
        self.reader = reader
        self.writer = writer
        self.ctx = ctx
        self.executor = executor
        self.tick_seconds = tick_seconds
        settings = ctx.settings
        self.state: SessionState = new_session(settings.width, settings.height, settings.color_mode, seed)
        self.peer = writer.get_extra_info("peername")
        self._lines: asyncio.Queue = asyncio.Queue()

    async def _read_lines(self):
        """Feed decoded lines into the queue; None marks end of input."""
        try:
            while True:
                raw = await self.reader.readline()
                if not raw:
                    break
                await self._lines.put(raw.decode("utf-8").rstrip("\r\n"))
        except READ_ERRORS as exc:
            logger.info("read failed for %s: %s", self.peer, exc)
        finally:
            self._lines.put_nowait(None)

    def _drain_input(self) -> bool:
        """Apply every queued line; False once the connection has closed."""
        while True:
            try:
                line = self._lines.get_nowait()
            except asyncio.QueueEmpty:
                return True
            if line is None:
                return False
            if is_quit(line):
                self.state.quit_requested = True
                return True
            handle_command(line, self.state, self.ctx.router_ctx)

    async def _call_store(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, func, *args)

    async def _sync_persistence(self):
        state = self.state
        texts = self.ctx.texts
        if state.pending_load:
            state.pending_load = False
            try:
                loaded = await self._call_store(self.ctx.store.load_caught_set, state.trainer)
            except sqlite3.Error as exc:
                logger.warning("could not load pokedex for %s: %s", state.trainer, exc)
                loaded = set()
            state.caught |= loaded
            if loaded:
                set_notice(
                    state.scene,
                    texts.render("game", "welcome", "", trainer=state.trainer, count=len(state.caught)),
                )
        await self._flush_saves()

    async def _flush_saves(self):
        """Write the whole caught set once if any capture is still unsaved."""
        state = self.state
        if not state.pending_saves:
            return
        state.pending_saves = []
        try:
            await self._call_store(self.ctx.store.save_caught_set, state.trainer, set(state.caught))
        except sqlite3.Error as exc:
            logger.warning("could not save pokedex for %s: %s", state.trainer, exc)
            set_notice(state.scene, self.ctx.texts.get("game", "save_failed"))

    async def _write(self, text: str):
        self.writer.write(text.encode("utf-8"))
        await self.writer.drain()

    async def _restore(self, graceful: bool):
        payload = RESTORE_SEQUENCE
        if graceful:
            payload += self.ctx.texts.get("session", "farewell", "Bye!") + "\r\n"
        try:
            await self._write(payload)
        except WRITE_ERRORS as exc:
            logger.debug("restore write to %s failed: %s", self.peer, exc)
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except WRITE_ERRORS as exc:
            logger.debug("close of %s failed: %s", self.peer, exc)

    async def run(self):
        logger.info("session connected: %s", self.peer)
        reader_task = asyncio.create_task(self._read_lines())
        graceful = False
        try:
            await self._write(ENTER_SEQUENCE)
            while self._drain_input():
                if self.state.quit_requested:
                    graceful = True
                    break
                await self._sync_persistence()
                await self._write(tick(self.state, self.ctx))
                await asyncio.sleep(self.tick_seconds)
        except WRITE_ERRORS as exc:
            logger.info("write to %s failed: %s", self.peer, exc)
        finally:
            reader_task.cancel()
            await asyncio.wait([reader_task])
            await self._flush_saves()
            await self._restore(graceful)
            logger.info("session closed: %s (trainer=%s)", self.peer, self.state.trainer or "-")
