"""Inbound event variants handled by the session actor.

Transport handlers translate Socket.IO packets into these values and post
them to the actor inbox; nothing else mutates session state.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Connect:
    connection_id: str


@dataclass(frozen=True)
class Disconnect:
    connection_id: str


@dataclass(frozen=True)
class Join:
    connection_id: str
    display_name: str


@dataclass(frozen=True)
class SubmitMessage:
    connection_id: str
    display_name: str
    text: str


@dataclass(frozen=True)
class StartGame:
    connection_id: str


@dataclass(frozen=True)
class AddBannedWord:
    connection_id: str
    word: str


# Posted to stop a running dispatch loop
STOP = object()
