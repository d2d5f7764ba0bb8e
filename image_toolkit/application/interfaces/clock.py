from __future__ import annotations

import datetime as _dt
from typing import Protocol


class IClock(Protocol):
    """Timestamp source for attribution metadata (`downloadedAt`).

    `now()` returns a timezone-aware datetime; sidecars render it as UTC.
    """

    def now(self) -> _dt.datetime:
        ...
