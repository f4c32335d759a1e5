import os

BACKEND_ROOT = os.path.abspath(os.path.dirname(__file__))


def _split(value):
    return [item.strip() for item in value.split(',') if item.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Listening socket
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    CORS_ALLOWED_ORIGINS = _split(os.environ.get(
        'CORS_ALLOWED_ORIGINS',
        'http://localhost:3000,http://127.0.0.1:3000',
    ))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Banned word store, rewritten whole on every addition
    BANNED_WORDS_PATH = os.environ.get('BANNED_WORDS_PATH') or os.path.join(BACKEND_ROOT, 'banned_words.json')
    # Game rules
    ESCAPE_MARKER = os.environ.get('ESCAPE_MARKER', '/')
    TERMINAL_CHARACTER = os.environ.get('TERMINAL_CHARACTER', 'ん')
    WARNING_USAGE_COUNT = int(os.environ.get('WARNING_USAGE_COUNT', '2'))
    GAME_OVER_USAGE_COUNT = int(os.environ.get('GAME_OVER_USAGE_COUNT', '3'))
    # Drain the session inbox on the posting handler instead of a background task
    DISPATCH_INLINE = os.environ.get('DISPATCH_INLINE', '').lower() in ('1', 'true', 'yes')
    # Optional: fixed seed for choosing the first player. Unset means system entropy.
    RANDOM_SEED = os.environ.get('RANDOM_SEED')
