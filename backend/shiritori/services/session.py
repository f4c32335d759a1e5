import random
from typing import Dict, List, Optional, Sequence

from shiritori.models import Participant, SessionStatus


class GameSession:
    """Turn-based state for one round of shiritori.

    - ``turn_order`` is a snapshot of the roster taken at :meth:`start` and is
      not mutated while the game is in progress, even when players leave
    - ``current_turn_index`` always points inside ``turn_order`` while in progress
    - :meth:`reset` clears every per-round field and returns to NOT_STARTED
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.status = SessionStatus.NOT_STARTED
        self.turn_order: List[Participant] = []
        self.current_turn_index = 0
        self.word_usage_counts: Dict[str, int] = {}

    @property
    def in_progress(self) -> bool:
        return self.status == SessionStatus.IN_PROGRESS

    @property
    def current_player(self) -> Optional[Participant]:
        if not self.in_progress:
            return None
        return self.turn_order[self.current_turn_index]

    def start(self, roster: Sequence[Participant]) -> Optional[Participant]:
        """Freeze the roster and pick who goes first.

        Returns the first player, or None when nothing changed (already in
        progress, or nobody to play).
        """
        if self.in_progress or not roster:
            return None
        self.turn_order = list(roster)
        self.current_turn_index = self.rng.randrange(len(self.turn_order))
        self.word_usage_counts = {}
        self.status = SessionStatus.IN_PROGRESS
        return self.current_player

    def is_turn_of(self, display_name: str) -> bool:
        player = self.current_player
        return player is not None and player.display_name == display_name

    def record_word(self, word: str) -> int:
        count = self.word_usage_counts.get(word, 0) + 1
        self.word_usage_counts[word] = count
        return count

    def advance(self) -> Participant:
        self.current_turn_index = (self.current_turn_index + 1) % len(self.turn_order)
        return self.turn_order[self.current_turn_index]

    def reset(self) -> None:
        self.status = SessionStatus.NOT_STARTED
        self.turn_order = []
        self.current_turn_index = 0
        self.word_usage_counts = {}

    def to_dict(self):
        current = self.current_player
        return {
            'status': self.status.value,
            'turn_order': [p.display_name for p in self.turn_order],
            'current_turn_index': self.current_turn_index if self.in_progress else None,
            'current_player': current.display_name if current else None,
            'word_usage_counts': dict(self.word_usage_counts),
        }
