from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from copytxmate.clipboard.backend import ClipboardBackend, ClipboardError
from copytxmate.config import WatcherConfig
from copytxmate.formatting.formatter import TextFormatter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClipboardState:
    current_text: str
    formatted_text: str
    auto_format: bool
    revision: int


Listener = Callable[[ClipboardState], Any]


class ClipboardWatcher:
    """Poll the clipboard, format new text and optionally write it back.

    Text the watcher wrote itself is remembered so the next poll does not pick it up
    again as a fresh copy (which would reformat in a loop).
    """

    def __init__(
        self,
        backend: ClipboardBackend,
        *,
        config: WatcherConfig | None = None,
        formatter: TextFormatter | None = None,
    ) -> None:
        self._backend = backend
        self._config = config or WatcherConfig()
        self._formatter = formatter or TextFormatter()

        self._lock = threading.Lock()
        self._current_text = ""
        self._formatted_text = ""
        self._auto_format = bool(self._config.auto_format)
        self._revision = 0
        self._last_seen: str | None = None
        self._last_written: str | None = None
        self._read_failing = False
        self._listeners: list[Listener] = []

        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def poll_interval_seconds(self) -> float:
        return self._config.poll_interval_seconds

    @property
    def is_running(self) -> bool:
        t = self._thread
        return t is not None and t.is_alive()

    def _snapshot_locked(self) -> ClipboardState:
        return ClipboardState(
            current_text=self._current_text,
            formatted_text=self._formatted_text,
            auto_format=self._auto_format,
            revision=self._revision,
        )

    def snapshot(self) -> ClipboardState:
        with self._lock:
            return self._snapshot_locked()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` with every new published state. Returns an unsubscribe function."""

        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, state: ClipboardState) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(state)
            except Exception:
                logger.exception("clipboard listener crashed: revision=%s", state.revision)

    def _read(self) -> str | None:
        try:
            text = self._backend.read_text()
        except ClipboardError as e:
            # Log once per failure streak; the poll loop would repeat it every tick.
            if not self._read_failing:
                logger.warning("clipboard read failed: %s", e)
            self._read_failing = True
            return None
        if self._read_failing:
            logger.info("clipboard readable again")
        self._read_failing = False
        return text

    def _write(self, text: str) -> None:
        with self._lock:
            self._last_written = text
        try:
            self._backend.write_text(text)
        except ClipboardError:
            with self._lock:
                if self._last_written == text:
                    self._last_written = None
            raise

    def check_once(self) -> bool:
        """Pick up new clipboard text, if any. Returns True when the published state changed."""

        text = self._read()
        if text is None:
            return False

        with self._lock:
            if text == self._last_seen:
                return False
            self._last_seen = text
            if text == self._last_written:
                # Our own write coming back; consume it once.
                self._last_written = None
                return False

        formatted = self._formatter.format_text(text)

        with self._lock:
            self._current_text = text
            self._formatted_text = formatted
            self._revision += 1
            write_back = self._auto_format
            state = self._snapshot_locked()

        logger.info("new clipboard text: chars=%s auto_format=%s", len(text), write_back)

        if write_back:
            try:
                self._write(formatted)
            except ClipboardError:
                logger.exception("failed to write formatted text to clipboard")

        self._notify(state)
        return True

    def format_current(self) -> ClipboardState:
        with self._lock:
            text = self._current_text

        formatted = self._formatter.format_text(text)

        with self._lock:
            # Another poll may have replaced the text meanwhile; keep the newer one.
            if self._current_text == text:
                self._formatted_text = formatted
                self._revision += 1
            state = self._snapshot_locked()

        self._notify(state)
        return state

    def copy_to_clipboard(self, text: str) -> None:
        """Write `text` to the clipboard without the next poll reformatting it.

        Raises ClipboardError when the clipboard cannot be written.
        """

        self._write(text)

    def set_auto_format(self, enabled: bool) -> ClipboardState:
        with self._lock:
            changed = self._auto_format != bool(enabled)
            self._auto_format = bool(enabled)
            if changed:
                self._revision += 1
            state = self._snapshot_locked()

        if changed:
            logger.info("auto format %s", "enabled" if enabled else "disabled")
            self._notify(state)
        return state

    def _run(self) -> None:
        interval = self._config.poll_interval_seconds
        while not self._stop_event.is_set():
            try:
                self.check_once()
            except Exception:
                logger.exception("clipboard poll crashed")
            self._stop_event.wait(interval)

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="copytxmate-clipboard", daemon=True)
        self._thread.start()
        logger.info("clipboard watcher started: interval=%ss", self._config.poll_interval_seconds)

    def stop(self, *, timeout: float | None = 2.0) -> None:
        t = self._thread
        self._stop_event.set()
        if t is not None and t.is_alive() and t is not threading.current_thread():
            t.join(timeout=timeout)
        self._thread = None
        logger.info("clipboard watcher stopped")
