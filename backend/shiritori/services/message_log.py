from typing import List

from shiritori.models import Message


class MessageLog:
    """Ordered chat and word history for the current round."""

    def __init__(self):
        self._messages: List[Message] = []

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def replay(self) -> List[dict]:
        return [m.to_dict() for m in self._messages]

    def clear(self) -> None:
        self._messages = []

    def __len__(self):
        return len(self._messages)
