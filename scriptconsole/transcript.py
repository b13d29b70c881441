"""Transcript buffer and its durable, append-only console log."""

import os

from scriptconsole.globals import timestamp


class ConsoleLog:
    """
    Append-only text log mirroring everything shown in the transcript.
    - Opened in append mode, never truncated
    - Marks open, reset and close with a line of its own
    """

    def __init__(self, path: str):
        self.path = path
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        self._file = open(path, "a", encoding="utf-8")
        self._write(f"--- Logfile opened on {timestamp()} ---\n")

    @property
    def closed(self) -> bool:
        return self._file.closed

    def _write(self, text: str):
        self._file.write(text)
        self._file.flush()

    def write(self, text: str):
        """Appends text verbatim"""
        if not self.closed:
            self._write(text)

    def mark_reset(self):
        self.write("\n--- Console Reset ---\n")

    def close(self):
        """Writes the closing marker, flushes and closes. Safe to call twice."""
        if self.closed:
            return
        self._write(f"--- Logfile closed on {timestamp()} ---\n")
        self._file.close()


class TranscriptSink:
    """Displayed console output, append-only until cleared by a reset"""

    def __init__(self, log: ConsoleLog | None = None):
        self.log = log
        self._chunks: list[str] = []

    @property
    def text(self) -> str:
        return "".join(self._chunks)

    def append(self, text: str):
        """Appends to the buffer and flushes the same text to the log"""
        self._chunks.append(text)
        if self.log:
            self.log.write(text)

    def clear(self):
        """Clears the screen buffer only, the log keeps everything"""
        self._chunks = []
