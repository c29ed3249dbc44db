"""Incremental consumer for server-sent event chat streams.

The relay streams OpenAI-style completion frames::

    data: {"choices":[{"delta":{"content":"Hel"}}]}
    data: [DONE]

Bytes arrive in arbitrary chunks, so a chunk may end in the middle of a
UTF-8 code point, a line, or a JSON object. The consumer keeps a text
buffer across reads and only acts on complete lines. A complete line whose
JSON does not parse is pushed back and retried when more bytes arrive.
"""

import codecs
import json
from collections.abc import AsyncIterable, Callable

from pydantic import ValidationError as FrameValidationError

from .models import StreamFrame

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"

DeltaCallback = Callable[[str], None]


class SSEStreamConsumer:
    """Accumulates assistant text from a chunked SSE byte stream.

    ``on_delta`` receives the full accumulated content after every frame
    that contributed non-empty text, so callers can re-render the
    in-progress message token by token.

    Usage:
        consumer = SSEStreamConsumer(on_delta=render)
        async for chunk in response.aiter_bytes():
            consumer.feed(chunk)
            if consumer.done:
                break
        consumer.flush()
        print(consumer.content)
    """

    def __init__(self, on_delta: DeltaCallback | None = None):
        self._on_delta = on_delta
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._content = ""
        self._done = False

    @property
    def content(self) -> str:
        """Assistant text accumulated so far."""
        return self._content

    @property
    def done(self) -> bool:
        """True once a ``[DONE]`` frame has been seen."""
        return self._done

    @property
    def pending(self) -> str:
        """Text received but not yet consumed as complete lines."""
        return self._buffer

    def feed(self, chunk: bytes) -> None:
        """Decode a chunk of bytes and process every complete line in it."""
        if self._done:
            return

        self._buffer += self._decoder.decode(chunk)

        while not self._done:
            newline_index = self._buffer.find("\n")
            if newline_index == -1:
                break

            line = self._buffer[:newline_index]
            self._buffer = self._buffer[newline_index + 1:]

            if line.endswith("\r"):
                line = line[:-1]

            payload = self._payload(line)
            if payload is None:
                continue
            if payload == DONE_SENTINEL:
                self._done = True
                break

            try:
                parsed = json.loads(payload)
            except (ValueError, RecursionError):
                # Incomplete object: restore the line and wait for more bytes
                self._buffer = line + "\n" + self._buffer
                break

            self._apply(parsed)

    def flush(self) -> None:
        """Process whatever is left in the buffer after the stream closed.

        There is nothing more to wait for, so unparseable lines are dropped
        instead of retried. Safe to call repeatedly.
        """
        self._buffer += self._decoder.decode(b"", final=True)
        residual, self._buffer = self._buffer, ""

        if self._done or not residual.strip():
            return

        for raw in residual.split("\n"):
            if raw.endswith("\r"):
                raw = raw[:-1]

            payload = self._payload(raw)
            if payload is None:
                continue
            if payload == DONE_SENTINEL:
                self._done = True
                return

            try:
                parsed = json.loads(payload)
            except (ValueError, RecursionError):
                continue

            self._apply(parsed)

    async def consume(self, chunks: AsyncIterable[bytes]) -> str:
        """Feed an async byte stream to completion and return the content.

        Reading stops as soon as ``[DONE]`` is seen.
        """
        async for chunk in chunks:
            self.feed(chunk)
            if self._done:
                break
        self.flush()
        return self._content

    @staticmethod
    def _payload(line: str) -> str | None:
        """Return the data payload of a line, or None if it should be skipped."""
        if not line.strip() or line.startswith(":"):
            return None
        if not line.startswith(DATA_PREFIX):
            return None
        return line[len(DATA_PREFIX):].strip()

    def _apply(self, parsed: object) -> None:
        try:
            frame = StreamFrame.model_validate(parsed)
        except FrameValidationError:
            return

        delta = frame.delta_content
        if not delta:
            return

        self._content += delta
        if self._on_delta is not None:
            self._on_delta(self._content)
