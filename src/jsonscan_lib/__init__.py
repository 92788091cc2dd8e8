"""Incremental extraction of JSON objects from chunked text."""

from .boundary import find_balanced_object_length
from .decoder import MalformedObjectError, ObjectStreamDecoder, StreamState, parse_object
from .models import DecoderConfig, DecoderStats
from .prefix import PrefixSkipper, PrefixState
from .stream import CallbackSink, CollectingSink, JsonObjectStream, iter_file_objects, iter_objects

__all__ = [
    "CallbackSink",
    "CollectingSink",
    "DecoderConfig",
    "DecoderStats",
    "JsonObjectStream",
    "MalformedObjectError",
    "ObjectStreamDecoder",
    "PrefixSkipper",
    "PrefixState",
    "StreamState",
    "find_balanced_object_length",
    "iter_file_objects",
    "iter_objects",
    "parse_object",
]
