import logging

import click
from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS') or []
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from shiritori.services.actor import SessionActor
    from shiritori.services.banned_words import BannedWordStore
    from shiritori.services.broadcaster import SocketIOBroadcaster

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    banned_words = BannedWordStore(flask_app.config['BANNED_WORDS_PATH'])
    banned_words.load()
    actor = SessionActor.from_config(
        flask_app.config,
        banned_words,
        SocketIOBroadcaster(socketio, namespace=namespace),
    )
    flask_app.extensions['shiritori'] = actor

    from shiritori.main import main
    flask_app.register_blueprint(main)

    # Importing here ensures the handlers bind to the initialized socketio instance
    from shiritori.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    if not flask_app.config.get('DISPATCH_INLINE'):
        actor.start(socketio)

    @click.command('add-banned-word')
    @click.argument('word')
    def add_banned_word_command(word):
        """Adds WORD to the banned word file."""
        from shiritori.errors import ShiritoriError
        try:
            banned_words.add(word)
        except ShiritoriError as exc:
            raise click.ClickException(str(exc))
        click.echo(f'Banned: {word}')

    @click.command('list-banned-words')
    def list_banned_words_command():
        """Prints every banned word, one per line."""
        for word in banned_words.words:
            click.echo(word)

    flask_app.cli.add_command(add_banned_word_command)
    flask_app.cli.add_command(list_banned_words_command)

    return flask_app
