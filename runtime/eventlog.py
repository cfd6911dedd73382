from typing import List, Optional, Tuple
from combat.model import Event

class EventLog:
    """Append-only record of every battle event, for replay and polling clients."""

    def __init__(self):
        self._log: List[Event] = []

    def __len__(self) -> int:
        return len(self._log)

    def append_many(self, evts: List[Event]) -> Tuple[int, int]:
        """Append events and return (start_offset, end_offset)."""
        start = len(self._log)
        self._log.extend(evts)
        return start, len(self._log) - 1

    def since(self, offset: int, limit: int = 1000, kind: Optional[str] = None) -> Tuple[List[Event], int]:
        """
        Return up to limit events from offset onward, plus the offset to poll from next.

        With kind set, only matching events are returned, but the next offset
        still advances past everything scanned.
        """
        offset = max(0, offset)
        if kind is None:
            chunk = self._log[offset: offset + limit]
            return chunk, offset + len(chunk)
        chunk = []
        pos = offset
        while pos < len(self._log) and len(chunk) < limit:
            if self._log[pos].kind == kind:
                chunk.append(self._log[pos])
            pos += 1
        return chunk, pos

    def for_round(self, round_no: int) -> List[Event]:
        return [e for e in self._log if e.round == round_no]
