from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the shiritori server!'})


@main.route('/health')
def health_check():
    return jsonify({'status': 'ok'})


@main.route('/api/state')
def get_state():
    """Returns a read-only snapshot of the session, roster and message log."""
    return jsonify(current_app.extensions['shiritori'].snapshot())


@main.route('/api/banned-words')
def get_banned_words():
    return jsonify({'bannedWords': current_app.extensions['shiritori'].banned_words.words})
