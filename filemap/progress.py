from __future__ import annotations
from typing import Any, Callable, Dict, Optional

ProgressCallback = Callable[[Dict[str, Any]], None]

class Progress:
    """
    Thin wrapper over an optional on_progress callback.
    Events are dicts: {"phase": str, "pct": int, "msg": str}.
    """
    def __init__(self, callback: Optional[ProgressCallback] = None) -> None:
        self._cb = callback
        self._last: Dict[str, int] = {}

    @property
    def enabled(self) -> bool:
        return self._cb is not None

    def emit(self, phase: str, pct: int, msg: str = "") -> None:
        if self._cb is None:
            return
        pct = max(0, min(100, int(pct)))
        self._last[phase] = pct
        self._cb({"phase": phase, "pct": pct, "msg": msg})

    def step(self, phase: str, done: int, total: int) -> None:
        """Emit only when the whole-percent value changes for this phase."""
        if self._cb is None or total <= 0:
            return
        pct = (done * 100) // total
        if self._last.get(phase) == pct:
            return
        self.emit(phase, pct, f"{done}/{total}")
