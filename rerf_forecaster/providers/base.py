"""Bar source interface shared by every provider."""

from __future__ import annotations

import abc
import logging
from typing import Sequence

from ..core.bars import Bar

LOGGER = logging.getLogger(__name__)


class BarSource(abc.ABC):
    """Produce a chronologically ordered, weekend-free sequence of daily bars."""

    name: str = "base"

    @abc.abstractmethod
    def fetch_bars(self, symbol: str) -> list[Bar]:  # pragma: no cover - interface
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def ensure_chronological(bars: Sequence[Bar]) -> list[Bar]:
    """Return ``bars`` sorted by date, logging when the input was out of order."""

    ordered = sorted(bars, key=lambda bar: bar.date)
    if ordered != list(bars):
        LOGGER.debug("Re-ordered %s bars into chronological order", len(ordered))
    return ordered


__all__ = ["BarSource", "ensure_chronological"]
