# src/jsonscan_lib/decoder.py
"""Incremental decoder for back-to-back JSON objects.

Text arrives in arbitrary chunks. Each chunk is appended to an internal
buffer and every complete top-level ``{...}`` object found in it is parsed
with :mod:`json` and handed to a sink in arrival order. A ``]`` left at the
front of the buffer after extraction marks the end of the stream.

Results are delivered through a sink object with three methods:

* ``emit(value)`` for each parsed object,
* ``fail(error)`` once, with a :class:`MalformedObjectError`,
* ``complete()`` once, when the closing ``]`` is seen.

After ``fail`` or ``complete`` the decoder ignores further input apart from
counting it in :attr:`ObjectStreamDecoder.stats`.
"""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import replace
from typing import Any, Callable, Optional, Protocol

from .boundary import find_balanced_object_length
from .models import DecoderConfig, DecoderStats
from .prefix import PrefixSkipper, PrefixState


logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 200


class MalformedObjectError(ValueError):
    """Raised when a balanced ``{...}`` span is not valid JSON."""

    def __init__(self, text: str, message: str) -> None:
        self.text = text
        self.message = message
        preview = text if len(text) <= _PREVIEW_CHARS else text[:_PREVIEW_CHARS] + "..."
        super().__init__(f"JSON parse error: {message}\nObject text: {preview}")


class StreamState(enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


class ObjectSink(Protocol):
    def emit(self, value: Any) -> None: ...

    def fail(self, error: MalformedObjectError) -> None: ...

    def complete(self) -> None: ...


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant {name!r}")


def parse_object(text: str, value_factory: Optional[Callable[[Any], Any]] = None) -> Any:
    """Parse one extracted object, converting it with ``value_factory`` if given."""
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise MalformedObjectError(text, str(e)) from e
    if value_factory is None:
        return value
    try:
        return value_factory(value)
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedObjectError(text, f"{type(e).__name__}: {e}") from e


class ObjectStreamDecoder:
    """Stateful scanner fed one text chunk at a time.

    Parameters
    ----------
    prefix: str | None
        Literal marker to discard, together with everything before it,
        before scanning starts. ``None`` or ``""`` scans from the first chunk.
    value_factory: callable | None
        Applied to every parsed ``dict``; its return value is emitted
        instead. A ``KeyError``, ``TypeError`` or ``ValueError`` raised by it
        counts as malformed input.
    """

    def __init__(
        self,
        prefix: Optional[str] = None,
        value_factory: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        self._prefix = PrefixSkipper(prefix)
        self._value_factory = value_factory
        self._buffer = ""
        self._state = StreamState.ACTIVE
        self._stats = DecoderStats()

    @classmethod
    def from_config(
        cls,
        config: DecoderConfig,
        value_factory: Optional[Callable[[Any], Any]] = None,
    ) -> "ObjectStreamDecoder":
        return cls(prefix=config.prefix, value_factory=value_factory)

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def completed(self) -> bool:
        return self._state is StreamState.COMPLETED

    @property
    def failed(self) -> bool:
        return self._state is StreamState.FAILED

    @property
    def prefix_state(self) -> PrefixState:
        return self._prefix.state

    @property
    def pending(self) -> str:
        """Buffered text that has not been consumed yet."""
        return self._buffer

    @property
    def stats(self) -> DecoderStats:
        return replace(self._stats)

    def transform(self, chunk: str, sink: ObjectSink) -> None:
        """Consume ``chunk`` and report every object it completes to ``sink``."""
        stats = self._stats
        stats.chunks += 1
        stats.length += len(chunk)
        stats.max_chunk_size = max(stats.max_chunk_size, len(chunk))

        if self._state is not StreamState.ACTIVE:
            return

        text = self._prefix.feed(chunk)
        if text is None:
            return
        self._buffer += text
        stats.max_buffer_length = max(stats.max_buffer_length, len(self._buffer))

        while True:
            start = self._buffer.find("{")
            if start == -1:
                break
            length = find_balanced_object_length(self._buffer, start)
            if not length:
                break
            end = start + length
            try:
                value = parse_object(self._buffer[start:end], self._value_factory)
            except MalformedObjectError as e:
                self._state = StreamState.FAILED
                logger.error("Stopping decoder after malformed object: %s", e.message)
                sink.fail(e)
                return
            self._buffer = self._buffer[end:]
            stats.items += 1
            sink.emit(value)

        if self._buffer.lstrip().startswith("]"):
            self._state = StreamState.COMPLETED
            logger.debug("End of stream after %d object(s)", stats.items)
            sink.complete()

    def flush(self, sink: ObjectSink) -> None:
        """Signal end of input. Nothing is emitted; truncated data is logged."""
        if self._state is not StreamState.ACTIVE:
            return
        if self._prefix.state is PrefixState.PENDING:
            logger.warning("Input ended before prefix %r was found", self._prefix.prefix)
        elif "{" in self._buffer:
            logger.warning(
                "Input ended inside an object; %d character(s) left unparsed",
                len(self._buffer) - self._buffer.find("{"),
            )
