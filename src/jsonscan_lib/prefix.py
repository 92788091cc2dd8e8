from __future__ import annotations

import enum
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class PrefixState(enum.Enum):
    PENDING = "pending"
    SKIPPED = "skipped"


class PrefixSkipper:
    """Discard input up to and including a literal marker.

    The marker may be split across chunks, so the last ``len(prefix) - 1``
    characters of unmatched text are kept for the next search.
    """

    def __init__(self, prefix: Optional[str] = None) -> None:
        self.prefix = prefix or None
        self._window = ""
        self.state = PrefixState.PENDING if self.prefix else PrefixState.SKIPPED

    @property
    def skipped(self) -> bool:
        return self.state is PrefixState.SKIPPED

    def feed(self, chunk: str) -> Optional[str]:
        """Return the text following the marker, or ``None`` while it is unseen."""
        if self.state is PrefixState.SKIPPED:
            return chunk

        window = self._window + chunk
        idx = window.find(self.prefix)
        if idx == -1:
            keep = len(self.prefix) - 1
            self._window = window[-keep:] if keep else ""
            return None

        self.state = PrefixState.SKIPPED
        self._window = ""
        logger.debug("Prefix %r matched; scanning begins", self.prefix)
        return window[idx + len(self.prefix):]
