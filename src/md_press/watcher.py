"""
Debounced file watching.

watchdog delivers events on its observer thread; they are handed to the
asyncio loop, debounced per path, and run one at a time by a single
worker so conversions never overlap.
"""
import asyncio
import os
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

import structlog
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.polling import PollingObserver

from .files import is_markdown_file

logger = structlog.get_logger()

ChangeCallback = Callable[[Path], Awaitable[object]]

_STOP = object()


def is_hidden(path: Union[str, Path], root: Union[str, Path]) -> bool:
    """True if any component of path below root starts with a dot"""
    relative = Path(os.path.relpath(path, root))
    return any(part.startswith(".") and part not in (".", "..") for part in relative.parts)


class Debouncer:
    """
    Delays a callback until no trigger for the same key has arrived for
    `delay` seconds. Each key has its own timer.

    Must be used from the event loop thread.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[Path], None],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.delay = delay
        self.callback = callback
        self._loop = loop
        self._timers: dict[Path, asyncio.TimerHandle] = {}

    @property
    def pending(self) -> set[Path]:
        return set(self._timers)

    def trigger(self, key: Path) -> None:
        """Restart the quiet period for key"""
        loop = self._loop or asyncio.get_running_loop()
        timer = self._timers.pop(key, None)
        if timer is not None:
            timer.cancel()
        self._timers[key] = loop.call_later(self.delay, self._fire, key)

    def _fire(self, key: Path) -> None:
        self._timers.pop(key, None)
        self.callback(key)

    def cancel_all(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()


class ChangeHandler(FileSystemEventHandler):
    """Forwards changes to Markdown files, skipping dotfile paths"""

    def __init__(self, root: Union[str, Path], notify: Callable[[Path], None]):
        super().__init__()
        self.root = Path(root)
        self.notify = notify

    def handle(self, path: Union[str, bytes], is_directory: bool) -> None:
        path = Path(os.fsdecode(path))
        if is_directory or is_hidden(path, self.root):
            return
        if not is_markdown_file(path):
            return
        self.notify(path)

    def on_modified(self, event: FileSystemEvent) -> None:
        self.handle(event.src_path, event.is_directory)

    def on_moved(self, event: FileSystemEvent) -> None:
        # Editors that save by renaming a temp file over the original
        self.handle(event.dest_path, event.is_directory)


class Watcher:
    """
    Watches a directory and re-runs a conversion for each changed file.

    Args:
        root: Directory to watch recursively
        on_change: Coroutine function called with the changed path
        debounce_seconds: Quiet period before a change is processed
        polling: Use a polling observer instead of native notifications
        observer: Observer instance to use (for tests)
    """

    def __init__(
        self,
        root: Union[str, Path],
        on_change: ChangeCallback,
        debounce_seconds: float = 0.5,
        polling: bool = False,
        observer=None,
    ):
        self.root = Path(root)
        self.on_change = on_change
        self.debounce_seconds = debounce_seconds
        self._observer = observer or (PollingObserver() if polling else Observer())
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._debouncer: Optional[Debouncer] = None
        self._queue: Optional[asyncio.Queue] = None
        self._queued: set[Path] = set()
        self._worker: Optional[asyncio.Task] = None
        self._accepting = False

    @property
    def is_running(self) -> bool:
        return self._accepting

    async def start(self) -> None:
        """Start observing and processing changes"""
        self._loop = asyncio.get_running_loop()
        self._debouncer = Debouncer(self.debounce_seconds, self._enqueue, loop=self._loop)
        self._queue = asyncio.Queue()
        self._worker = asyncio.create_task(self._run_worker())
        self._accepting = True

        handler = ChangeHandler(self.root, self.notify)
        self._observer.schedule(handler, str(self.root), recursive=True)
        self._observer.start()
        logger.info("watch_started", root=str(self.root), debounce=self.debounce_seconds)

    def notify(self, path: Path) -> None:
        """Report a change; safe to call from any thread"""
        if self._loop is None or not self._accepting:
            return
        self._loop.call_soon_threadsafe(self._schedule, path)

    def _schedule(self, path: Path) -> None:
        if not self._accepting:
            return
        logger.debug("change_detected", path=str(path))
        self._debouncer.trigger(path)

    def _enqueue(self, path: Path) -> None:
        if not self._accepting or path in self._queued:
            return
        self._queued.add(path)
        self._queue.put_nowait(path)

    async def _run_worker(self) -> None:
        while True:
            path = await self._queue.get()
            if path is _STOP:
                return
            self._queued.discard(path)
            try:
                await self.on_change(path)
            except Exception:
                logger.exception("conversion_failed", path=str(path))

    async def stop(self) -> None:
        """
        Stop accepting changes, drop pending debounce timers, and wait
        for conversions already queued to finish.
        """
        if not self._accepting:
            return
        self._accepting = False

        self._observer.stop()
        await asyncio.to_thread(self._observer.join)
        self._debouncer.cancel_all()

        self._queue.put_nowait(_STOP)
        await self._worker
        logger.info("watch_stopped", root=str(self.root))

    async def run(self, stop_event: asyncio.Event) -> None:
        """Watch until stop_event is set"""
        await self.start()
        try:
            await stop_event.wait()
        finally:
            await self.stop()
