from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass
class DecoderStats:
    """Running counters for one decoder; values only ever increase."""
    chunks: int = 0
    length: int = 0
    max_chunk_size: int = 0
    max_buffer_length: int = 0
    items: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class DecoderConfig:
    """Construction options for an object stream decoder."""
    prefix: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "DecoderConfig":
        data = data or {}
        prefix = data.get("prefix")
        return cls(prefix=str(prefix) if prefix else None)
