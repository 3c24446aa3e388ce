#!/usr/bin/env python3
"""
Flask Backend Server for the Lantern parser
Keeps one ParserSession per client and exposes parse/command endpoints
"""

import sys
import os
import uuid
from flask import Flask, jsonify, request
from flask_socketio import SocketIO, emit
from flask_cors import CORS

# Add src directory to Python path
src_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src')
sys.path.insert(0, src_path)

from core.grammar import is_error
from core.logger import parser_logger
from engine import ParserSession
from systems.content_loader import ContentError
from ui.crt_effects import CRTOutput
from ui.message_reporter import MessageReporter
from ui.settings import settings

app = Flask(__name__)
app.config['SECRET_KEY'] = os.environ.get('LANTERN_SECRET_KEY', 'lantern-dev-key')
CORS(app)
socketio = SocketIO(app, cors_allowed_origins="*")


class WebSession:
    """A ParserSession plus the capturing renderer that collects its output."""

    def __init__(self, session: ParserSession):
        self.session = session
        self.crt = CRTOutput()
        self.crt.enabled = False
        self.reporter = MessageReporter(self.crt, bus=session.bus, vocabulary=session.vocabulary)
        self.reporter.suggest_corrections = settings.get("suggest_corrections", True)
        self.reporter.show_parse = settings.get("show_parse", False)

    def submit(self, line):
        self.crt.start_capture()
        try:
            result = self.session.submit(line)
        finally:
            messages = self.crt.stop_capture()
        return result, messages

    def close(self):
        self.reporter.cleanup()


# Sessions by id; nothing is shared between them
game_sessions = {}


def serialize_session_state(session: ParserSession):
    """Convert session state to JSON-serializable format"""
    world = session.world
    room = world.current_room
    return {
        'session_id': session.session_id,
        'turn': session.turn,
        'finished': session.finished,
        'room': {
            'id': room.id,
            'name': room.name,
            'description': room.description,
            'exits': sorted(room.exits),
        } if room else None,
        'inventory': [{'id': o.id, 'name': o.display_name} for o in world.inventory()],
        'visible': [{'id': o.id, 'name': o.display_name} for o in world.reachable_objects() if not o.is_held()],
        'pronouns': session.pronouns.to_dict(),
    }


def _request_data():
    return request.get_json(silent=True) or {}


def _lookup(session_id):
    return game_sessions.get(session_id)


def create_session(session_id=None):
    """Build a session from the configured world file and register it."""
    session_id = session_id or uuid.uuid4().hex
    previous = game_sessions.pop(session_id, None)
    if previous:
        previous.close()
    session = ParserSession.from_file(settings.get("world_file"), session_id=session_id)
    web_session = WebSession(session)
    game_sessions[session_id] = web_session
    parser_logger.info(f"Created web session {session_id}")
    return web_session


@app.route('/api/new_game', methods=['POST'])
def new_game():
    """Start a new game"""
    data = _request_data()
    try:
        web_session = create_session(data.get('session_id'))
    except ContentError as e:
        return jsonify({'success': False, 'error': str(e)}), 500

    _, messages = web_session.submit("look")
    return jsonify({
        'success': True,
        'session_id': web_session.session.session_id,
        'messages': messages,
        'game_state': serialize_session_state(web_session.session),
    })


@app.route('/api/parse', methods=['POST'])
def parse_command():
    """Resolve a line without executing it"""
    data = _request_data()
    web_session = _lookup(data.get('session_id', 'default'))
    if web_session is None:
        return jsonify({'error': 'Session not found'}), 404

    result = web_session.session.parse(data.get('command', ''))
    return jsonify({
        'success': not is_error(result),
        'result': result.to_dict(),
    })


@app.route('/api/command', methods=['POST'])
def execute_command():
    """Play one turn and return the rendered output"""
    data = _request_data()
    web_session = _lookup(data.get('session_id', 'default'))
    if web_session is None:
        return jsonify({'error': 'Session not found'}), 404

    result, messages = web_session.submit(data.get('command', ''))
    return jsonify({
        'success': not is_error(result),
        'result': result.to_dict(),
        'messages': messages,
        'game_state': serialize_session_state(web_session.session),
    })


@app.route('/api/state/<session_id>', methods=['GET'])
def get_state(session_id):
    """Get current session state"""
    web_session = _lookup(session_id)
    if web_session is None:
        return jsonify({'error': 'Session not found'}), 404
    return jsonify(serialize_session_state(web_session.session))


@socketio.on('connect')
def handle_connect():
    """Handle client connection"""
    parser_logger.info('Client connected')
    emit('connected', {'data': 'Connected to the Lantern server'})


@socketio.on('command')
def handle_command(data):
    """Socket.IO counterpart of POST /api/command"""
    data = data or {}
    web_session = _lookup(data.get('session_id', 'default'))
    if web_session is None:
        emit('error', {'error': 'Session not found'})
        return

    result, messages = web_session.submit(data.get('command', ''))
    emit('output', {
        'success': not is_error(result),
        'result': result.to_dict(),
        'messages': messages,
        'game_state': serialize_session_state(web_session.session),
    })


@socketio.on('disconnect')
def handle_disconnect():
    """Handle client disconnection"""
    parser_logger.info('Client disconnected')


if __name__ == '__main__':
    print("=" * 60)
    print("   LANTERN")
    print("   Browser Interface Server")
    print("=" * 60)
    print("\nStarting server on http://localhost:5000")
    print("\nPress CTRL+C to stop the server")
    print("=" * 60)
    socketio.run(app, host='0.0.0.0', port=5000, debug=True, allow_unsafe_werkzeug=True)
