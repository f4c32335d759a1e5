import enum
from dataclasses import dataclass


class SessionStatus(str, enum.Enum):
    NOT_STARTED = 'not_started'
    IN_PROGRESS = 'in_progress'


@dataclass(frozen=True)
class Participant:
    connection_id: str
    display_name: str


@dataclass(frozen=True)
class Message:
    display_name: str
    text: str

    def to_dict(self):
        return {
            'displayName': self.display_name,
            'text': self.text,
        }
