import json
import os
import sys
import pytest

# Ensure the backend root (containing the `shiritori` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from shiritori import create_app, socketio
from shiritori.services.actor import SessionActor
from shiritori.services.banned_words import BannedWordStore


class TestConfig:
    TESTING = True
    SECRET_KEY = 'test-secret'
    CORS_ALLOWED_ORIGINS = ['http://localhost:3000']
    SOCKETIO_NAMESPACE = '/'
    LOG_LEVEL = 'DEBUG'
    BANNED_WORDS_PATH = None
    ESCAPE_MARKER = '/'
    TERMINAL_CHARACTER = 'ん'
    WARNING_USAGE_COUNT = 2
    GAME_OVER_USAGE_COUNT = 3
    DISPATCH_INLINE = True
    RANDOM_SEED = None


class FirstPick:
    """Stand-in for random.Random that always picks the given index."""

    def __init__(self, index=0):
        self.index = index
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return self.index


class RecordingBroadcaster:
    def __init__(self):
        self.sent = []

    def to_all(self, event, payload=None):
        self.sent.append(('all', event, payload))

    def to_one(self, connection_id, event, payload=None):
        self.sent.append((connection_id, event, payload))

    def events(self, target=None):
        return [(e, p) for t, e, p in self.sent if target is None or t == target]

    def names(self, target=None):
        return [e for e, _ in self.events(target)]

    def clear(self):
        self.sent = []


def write_banned_words(path, words):
    with open(path, 'w', encoding='utf-8') as fh:
        json.dump({'bannedWords': words}, fh, ensure_ascii=False)


@pytest.fixture()
def banned_words_path(tmp_path):
    path = tmp_path / 'banned_words.json'
    write_banned_words(path, ['badword', 'Ugly'])
    return str(path)


@pytest.fixture()
def store(banned_words_path):
    banned_words = BannedWordStore(banned_words_path)
    banned_words.load()
    return banned_words


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def actor(store, broadcaster):
    a = SessionActor(store, broadcaster)
    a.session.rng = FirstPick(0)
    return a


@pytest.fixture()
def flask_app(banned_words_path):
    class Config(TestConfig):
        BANNED_WORDS_PATH = banned_words_path

    application = create_app(Config)
    application.extensions['shiritori'].session.rng = FirstPick(0)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _connect():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
        )
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()
