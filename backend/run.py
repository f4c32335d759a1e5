import sys

from shiritori import create_app, socketio

app = create_app()

if __name__ == '__main__':
    host = app.config['HOST']
    port = app.config['PORT']
    app.logger.info(f"[listen] http://{host}:{port}")
    try:
        socketio.run(app, host=host, port=port, allow_unsafe_werkzeug=True)
    except OSError as exc:
        # Binding the port is the only fatal failure
        app.logger.critical(f"[listen-failed] host={host} port={port} error={exc}")
        sys.exit(1)
