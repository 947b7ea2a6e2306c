"""Output sink that renders entries and writes them to a stream."""

import io
import threading
from typing import IO, Any

from contextlog.core.models import LogEntry
from contextlog.core.ports import Renderer


def _is_binary(stream: IO[Any]) -> bool:
    if isinstance(stream, io.TextIOBase):
        return False
    if isinstance(stream, (io.BufferedIOBase, io.RawIOBase)):
        return True
    # wrappers and other file-likes: trust the mode, default to text
    mode = getattr(stream, "mode", "")
    return isinstance(mode, str) and "b" in mode


class Sink:
    """Logger callback that writes each rendered entry with a single write.

    Writes are serialized with a lock and flushed immediately, so entries
    emitted from several threads never interleave within a line. Text streams
    receive ``str``; binary streams (``io`` buffered or raw streams, or a
    ``mode`` containing ``b``) receive UTF-8 encoded bytes. Write
    errors propagate to the caller.

    Args:
        stream: Text or binary stream to write to.
        renderer: Renderer producing the text for each entry.
    """

    def __init__(self, stream: IO[Any], renderer: Renderer) -> None:
        self.stream = stream
        self.renderer = renderer
        self._binary = _is_binary(stream)
        self._lock = threading.Lock()

    def __call__(self, entry: LogEntry) -> None:
        text = self.renderer.render(entry)
        data: str | bytes = text.encode("utf-8") if self._binary else text
        with self._lock:
            self.stream.write(data)
            self.stream.flush()
