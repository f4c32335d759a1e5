from typing import Any


class SocketIOBroadcaster:
    """Delivers outbound events through a Flask-SocketIO server.

    At-most-once per connection, as the transport gives it: no retries and
    no acknowledgements.
    """

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def to_all(self, event: str, payload: Any = None) -> None:
        self._emit(event, payload)

    def to_one(self, connection_id: str, event: str, payload: Any = None) -> None:
        self._emit(event, payload, to=connection_id)

    def _emit(self, event, payload, **kwargs):
        # Use socketio.emit since this may be called from a background task
        if payload is None:
            self.socketio.emit(event, namespace=self.namespace, **kwargs)
        else:
            self.socketio.emit(event, payload, namespace=self.namespace, **kwargs)
