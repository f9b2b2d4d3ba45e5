from __future__ import annotations

from typing import Protocol

import pyperclip


class ClipboardError(RuntimeError):
    """The system clipboard could not be read or written."""


class ClipboardBackend(Protocol):
    def read_text(self) -> str | None: ...

    def write_text(self, text: str) -> None: ...


class PyperclipBackend:
    """Plain-text system clipboard via pyperclip."""

    def read_text(self) -> str | None:
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            raise ClipboardError(str(e)) from e
        # pyperclip returns "" both for an empty clipboard and for non-text content.
        if not isinstance(text, str) or text == "":
            return None
        return text

    def write_text(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(str(e)) from e
