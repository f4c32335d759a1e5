import logging
import queue
import random
import threading

from shiritori import events
from shiritori.errors import GameNotStarted, OutOfTurn, RejectedContent, ShiritoriError
from shiritori.models import Message
from shiritori.services.message_log import MessageLog
from shiritori.services.registry import ConnectionRegistry
from shiritori.services.session import GameSession

logger = logging.getLogger(__name__)


class SessionActor:
    """Owns all shared game state and applies inbound events one at a time.

    Events are posted to a single inbox. Either one background task runs
    :meth:`run_forever`, or (inline mode) the posting handler calls
    :meth:`drain`. In both cases only one event is being handled at any
    moment, so the registry, session and log need no locking of their own.
    Readers outside the dispatcher (HTTP routes) go through :meth:`snapshot`,
    which waits for the event in flight to finish.
    """

    def __init__(self, banned_words, broadcaster, session=None, registry=None, message_log=None,
                 escape_marker='/', terminal_character='ん', warning_usage_count=2, game_over_usage_count=3):
        self.banned_words = banned_words
        self.broadcaster = broadcaster
        self.session = session or GameSession()
        self.registry = registry or ConnectionRegistry(banned_words)
        self.message_log = message_log or MessageLog()
        self.escape_marker = escape_marker
        self.terminal_character = terminal_character
        self.warning_usage_count = warning_usage_count
        self.game_over_usage_count = game_over_usage_count
        self.inbox = queue.Queue()
        self._drain_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._handlers = {
            events.Connect: self._on_connect,
            events.Disconnect: self._on_disconnect,
            events.Join: self._on_join,
            events.SubmitMessage: self._on_submit,
            events.StartGame: self._on_start_game,
            events.AddBannedWord: self._on_add_banned_word,
        }

    @classmethod
    def from_config(cls, config, banned_words, broadcaster):
        seed = config.get('RANDOM_SEED')
        return cls(
            banned_words,
            broadcaster,
            session=GameSession(rng=random.Random(seed)),
            escape_marker=config.get('ESCAPE_MARKER', '/'),
            terminal_character=config.get('TERMINAL_CHARACTER', 'ん'),
            warning_usage_count=int(config.get('WARNING_USAGE_COUNT', 2)),
            game_over_usage_count=int(config.get('GAME_OVER_USAGE_COUNT', 3)),
        )

    # ---- Inbox ----

    def post(self, event) -> None:
        self.inbox.put(event)

    def drain(self) -> None:
        """Handle every queued event on the calling thread."""
        while True:
            if not self._drain_lock.acquire(blocking=False):
                # Another thread is draining and will pick our event up
                return
            try:
                while True:
                    try:
                        event = self.inbox.get_nowait()
                    except queue.Empty:
                        break
                    if event is events.STOP:
                        continue
                    self.dispatch(event)
            finally:
                self._drain_lock.release()
            if self.inbox.empty():
                return

    def run_forever(self) -> None:
        logger.info("[dispatcher-start]")
        while True:
            event = self.inbox.get()
            if event is events.STOP:
                break
            self.dispatch(event)
        logger.info("[dispatcher-stop]")

    def start(self, socketio) -> None:
        socketio.start_background_task(self.run_forever)

    def stop(self) -> None:
        self.inbox.put(events.STOP)

    def dispatch(self, event) -> None:
        handler = self._handlers.get(type(event))
        if handler is None:
            logger.warning(f"[dispatch-unknown] event={event!r}")
            return
        try:
            with self._state_lock:
                handler(event)
        except ShiritoriError as exc:
            logger.info(f"[rejected] sid={event.connection_id} reason={type(exc).__name__}")
            self.broadcaster.to_one(event.connection_id, 'error', str(exc))
        except Exception:
            # Keep the dispatcher alive for everyone else
            logger.exception(f"[dispatch-failed] event={event!r}")

    # ---- Connection handling ----

    def _on_connect(self, event: events.Connect) -> None:
        count = self.registry.connect(event.connection_id)
        self.broadcaster.to_all('updateConnections', count)
        logger.info(f"[connect] sid={event.connection_id} connections={count}")

    def _on_disconnect(self, event: events.Disconnect) -> None:
        # The frozen turn order keeps the leaver's slot
        participant = self.registry.leave(event.connection_id)
        self._broadcast_roster()
        name = participant.display_name if participant else None
        logger.info(f"[disconnect] sid={event.connection_id} name={name} connections={self.registry.count()}")

    def _on_join(self, event: events.Join) -> None:
        participant = self.registry.join(event.connection_id, event.display_name)
        self._broadcast_roster()
        self.broadcaster.to_all('userJoined', participant.display_name)
        self.broadcaster.to_one(event.connection_id, 'updateMessages', self.message_log.replay())
        if self.session.in_progress:
            self.broadcaster.to_one(event.connection_id, 'gameAlreadyStarted')
        logger.info(f"[join] name={participant.display_name} sid={event.connection_id}")

    def _broadcast_roster(self) -> None:
        self.broadcaster.to_all('updateConnections', self.registry.count())
        self.broadcaster.to_all('updateUsers', self.registry.list())

    # ---- Game ----

    def _on_start_game(self, event: events.StartGame) -> None:
        first = self.session.start(self.registry.participants())
        if first is None:
            reason = 'already_in_progress' if self.session.in_progress else 'no_participants'
            logger.info(f"[start-ignored] sid={event.connection_id} reason={reason}")
            return
        self.broadcaster.to_all('gameStarted', first.display_name)
        logger.info(f"[game-started] first={first.display_name} players={len(self.session.turn_order)}")

    def _on_submit(self, event: events.SubmitMessage) -> None:
        name, text = event.display_name, event.text
        if self.banned_words.contains(text):
            raise RejectedContent()

        if self.escape_marker and text.startswith(self.escape_marker):
            self._publish(Message(name, text[len(self.escape_marker):]))
            return

        if not self.session.in_progress:
            raise GameNotStarted()
        if not self.session.is_turn_of(name):
            raise OutOfTurn()

        if self.terminal_character and text.endswith(self.terminal_character):
            self._reset()
            logger.info(f"[reset] word={text!r} ends with {self.terminal_character!r}")
            return

        count = self.session.record_word(text)
        if count >= self.game_over_usage_count:
            self._reset()
            self.broadcaster.to_all('gameOver')
            logger.info(f"[game-over] word={text!r} used {count} times")
        elif count >= self.warning_usage_count:
            self.broadcaster.to_one(event.connection_id, 'warning', text)
            logger.info(f"[warning] word={text!r} used {count} times by {name}")
        else:
            self._publish(Message(name, text))
            next_player = self.session.advance()
            self.broadcaster.to_all('nextPlayer', next_player.display_name)
            logger.info(f"[next-player] name={next_player.display_name} index={self.session.current_turn_index}")

    def _publish(self, message: Message) -> None:
        self.message_log.append(message)
        self.broadcaster.to_all('message', message.to_dict())

    def _reset(self) -> None:
        self.message_log.clear()
        self.session.reset()
        self.broadcaster.to_all('resetGame')

    def _on_add_banned_word(self, event: events.AddBannedWord) -> None:
        word = self.banned_words.add(event.word)
        self.broadcaster.to_all('bannedWordAdded', word)

    # ---- Read-only views ----

    def snapshot(self) -> dict:
        with self._state_lock:
            state = self.session.to_dict()
            state.update({
                'users': self.registry.list(),
                'connections': self.registry.count(),
                'messages': self.message_log.replay(),
            })
        return state
