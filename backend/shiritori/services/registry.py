from typing import Dict, List, Optional, Set

from shiritori.errors import RejectedName
from shiritori.models import Participant


class ConnectionRegistry:
    """Live connections and the participants who have joined through them.

    Independent of game state: the turn order frozen by a running session
    is never touched from here.
    """

    def __init__(self, banned_words):
        self.banned_words = banned_words
        self._connections: Set[str] = set()
        # dicts keep insertion order, which is the roster order
        self._participants: Dict[str, Participant] = {}

    def connect(self, connection_id: str) -> int:
        self._connections.add(connection_id)
        return self.count()

    def join(self, connection_id: str, display_name: str) -> Participant:
        if self.banned_words.contains(display_name):
            raise RejectedName()
        self._connections.add(connection_id)
        participant = Participant(connection_id=connection_id, display_name=display_name)
        self._participants[connection_id] = participant
        return participant

    def leave(self, connection_id: str) -> Optional[Participant]:
        self._connections.discard(connection_id)
        return self._participants.pop(connection_id, None)

    def participants(self) -> List[Participant]:
        return list(self._participants.values())

    def list(self) -> List[str]:
        return [p.display_name for p in self._participants.values()]

    def count(self) -> int:
        return len(self._connections)
