"""Errors reported privately to the connection that caused them.

None of these terminate the process or touch other participants' state.
The session actor catches :class:`ShiritoriError` and forwards
``str(exc)`` on the ``error`` channel.
"""


class ShiritoriError(Exception):
    message = 'Request rejected.'

    def __init__(self, message=None):
        super().__init__(message or self.message)


class RejectedName(ShiritoriError):
    message = 'That display name is not allowed.'


class RejectedContent(ShiritoriError):
    message = 'That word is not allowed.'


class OutOfTurn(ShiritoriError):
    message = 'It is not your turn, so you cannot submit a word.'


class GameNotStarted(OutOfTurn):
    message = 'The game has not started yet.'


class DuplicateBannedWord(ShiritoriError):
    message = 'That word is already banned.'


class InvalidBannedWord(ShiritoriError):
    message = 'A banned word cannot be blank.'


class PersistFailure(ShiritoriError):
    message = 'Failed to save the banned word.'
