# history.py - undo stack of completed moves
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, Optional, Tuple

from crazy_solitaire.cards import CardKey
from crazy_solitaire.piles import PileRef


@dataclass(frozen=True)
class MoveRecord:
    """Snapshot of one completed move.

    Holds card identities and pile addresses only, never live objects, so
    later moves on the same piles cannot change what an undo restores.
    ``source_index`` is where the first moved card sat in its source; the
    rest followed it contiguously.  ``flipped`` is the card turned face-up as
    a side effect (a newly exposed tableau card), if any.
    """

    cards: Tuple[CardKey, ...]
    source: PileRef
    dest: PileRef
    source_index: int
    flipped: Optional[CardKey] = None


class MoveHistory:
    """
    Push a record after each successful move; undo pops the newest one.
    """

    def __init__(self):
        self._stack: Deque[MoveRecord] = deque()

    def __len__(self) -> int:
        return len(self._stack)

    def __iter__(self) -> Iterator[MoveRecord]:
        return iter(self._stack)

    def push(self, record: MoveRecord) -> None:
        self._stack.append(record)

    def can_undo(self) -> bool:
        return len(self._stack) > 0

    def peek(self) -> Optional[MoveRecord]:
        return self._stack[-1] if self._stack else None

    def pop(self) -> Optional[MoveRecord]:
        return self._stack.pop() if self._stack else None

    def clear(self) -> None:
        self._stack.clear()
