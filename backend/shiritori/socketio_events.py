from flask import current_app, request
from flask_socketio import emit

from shiritori import events, socketio


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _actor():
    return current_app.extensions['shiritori']


def _dispatch(event) -> None:
    actor = _actor()
    actor.post(event)
    if current_app.config.get('DISPATCH_INLINE'):
        actor.drain()


def _reject(message: str) -> None:
    current_app.logger.info(f"[bad-payload] sid={_get_sid()} {message}")
    emit('error', message)


def handle_connect():
    _dispatch(events.Connect(_get_sid()))


def handle_disconnect(*args):
    _dispatch(events.Disconnect(_get_sid()))


def handle_join(display_name):
    if not isinstance(display_name, str) or not display_name.strip():
        _reject('A display name is required.')
        return
    _dispatch(events.Join(_get_sid(), display_name))


def handle_message(data):
    data = data if isinstance(data, dict) else {}
    display_name = data.get('displayName')
    text = data.get('text')
    if not isinstance(display_name, str) or not isinstance(text, str):
        _reject('displayName and text are required.')
        return
    _dispatch(events.SubmitMessage(_get_sid(), display_name, text))


def handle_start_game(*args):
    _dispatch(events.StartGame(_get_sid()))


def handle_add_banned_word(word):
    if not isinstance(word, str):
        _reject('A word is required.')
        return
    _dispatch(events.AddBannedWord(_get_sid(), word))


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('join', handle_join, namespace=namespace)
    socketio.on_event('message', handle_message, namespace=namespace)
    socketio.on_event('startGame', handle_start_game, namespace=namespace)
    socketio.on_event('addBannedWord', handle_add_banned_word, namespace=namespace)
