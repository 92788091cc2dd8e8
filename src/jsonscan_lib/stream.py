"""Push and pull front-ends for :class:`ObjectStreamDecoder`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, List, Optional, TextIO, Union

from .decoder import MalformedObjectError, ObjectStreamDecoder
from .models import DecoderConfig, DecoderStats


logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536


class CallbackSink:
    """Sink that forwards decoder events to plain callables.

    Without ``on_fail`` the error is raised from ``fail`` so it reaches
    whoever called :meth:`ObjectStreamDecoder.transform`.
    """

    def __init__(
        self,
        on_emit: Callable[[Any], None],
        on_fail: Optional[Callable[[MalformedObjectError], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ) -> None:
        self.on_emit = on_emit
        self.on_fail = on_fail
        self.on_complete = on_complete

    def emit(self, value: Any) -> None:
        self.on_emit(value)

    def fail(self, error: MalformedObjectError) -> None:
        if self.on_fail is None:
            raise error
        self.on_fail(error)

    def complete(self) -> None:
        if self.on_complete is not None:
            self.on_complete()


class CollectingSink:
    """Sink that records everything it receives."""

    def __init__(self) -> None:
        self.values: List[Any] = []
        self.error: Optional[MalformedObjectError] = None
        self.completed = False

    def emit(self, value: Any) -> None:
        self.values.append(value)

    def fail(self, error: MalformedObjectError) -> None:
        self.error = error

    def complete(self) -> None:
        self.completed = True

    def drain(self) -> List[Any]:
        values, self.values = self.values, []
        return values


class JsonObjectStream:
    """Feed text chunks in, get parsed objects back.

    ``feed`` returns the objects completed by each chunk. Objects that precede
    a malformed one in the same chunk are still returned; the error is raised
    by the next ``feed`` or :meth:`raise_for_error` call. A chunk whose first
    object is malformed raises at once. The stream stays dead afterwards.
    """

    def __init__(
        self,
        prefix: Optional[str] = None,
        value_factory: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        self.decoder = ObjectStreamDecoder(prefix=prefix, value_factory=value_factory)
        self._sink = CollectingSink()

    @classmethod
    def from_config(
        cls,
        config: DecoderConfig,
        value_factory: Optional[Callable[[Any], Any]] = None,
    ) -> "JsonObjectStream":
        stream = cls()
        stream.decoder = ObjectStreamDecoder.from_config(config, value_factory)
        return stream

    def __enter__(self) -> "JsonObjectStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def completed(self) -> bool:
        return self._sink.completed

    @property
    def stats(self) -> DecoderStats:
        return self.decoder.stats

    @property
    def error(self) -> Optional[MalformedObjectError]:
        return self._sink.error

    def raise_for_error(self) -> None:
        if self._sink.error is not None:
            raise self._sink.error

    def feed(self, chunk: str) -> List[Any]:
        self.raise_for_error()
        self.decoder.transform(chunk, self._sink)
        values = self._sink.drain()
        if not values:
            self.raise_for_error()
        return values

    def close(self) -> None:
        self.decoder.flush(self._sink)


def iter_objects(
    chunks: Iterable[str],
    prefix: Optional[str] = None,
    value_factory: Optional[Callable[[Any], Any]] = None,
) -> Iterator[Any]:
    """Yield objects decoded from ``chunks`` until the stream completes.

    Chunks after the closing ``]`` are not pulled from the iterable.
    """
    with JsonObjectStream(prefix=prefix, value_factory=value_factory) as stream:
        for chunk in chunks:
            yield from stream.feed(chunk)
            stream.raise_for_error()
            if stream.completed:
                break
    logger.debug("Decoded %d object(s) from %d chunk(s)", stream.stats.items, stream.stats.chunks)


def read_chunks(f: TextIO, chunk_size: int) -> Iterator[str]:
    while True:
        chunk = f.read(chunk_size)
        if not chunk:
            return
        yield chunk


def iter_file_objects(
    source: Union[str, Path, TextIO],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    prefix: Optional[str] = None,
    encoding: str = "utf-8",
    value_factory: Optional[Callable[[Any], Any]] = None,
) -> Iterator[Any]:
    """Read a text file (or open text stream) in chunks and yield its objects."""
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if hasattr(source, "read"):
        yield from iter_objects(read_chunks(source, chunk_size), prefix, value_factory)
        return
    with open(source, "r", encoding=encoding) as f:
        yield from iter_objects(read_chunks(f, chunk_size), prefix, value_factory)
