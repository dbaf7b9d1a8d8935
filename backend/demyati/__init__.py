import random

from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)


def _parse_origins(raw):
    if not raw or raw.strip() == '*':
        return '*'
    return [o.strip() for o in raw.split(',') if o.strip()]


def get_coordinator():
    return current_app.extensions['room_coordinator']


def get_broadcaster():
    return current_app.extensions['room_broadcaster']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _parse_origins(flask_app.config.get('CORS_ORIGINS', '*'))
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One store/broadcaster/coordinator per app; handlers reach them via app.extensions
    from demyati.services.rooms import RoomStore, SocketIOBroadcaster, RoomCoordinator
    broadcaster = SocketIOBroadcaster(socketio, namespace='/')
    seed = flask_app.config.get('RNG_SEED')
    coordinator = RoomCoordinator(
        RoomStore(),
        broadcaster,
        rng=random.Random(seed) if seed is not None else None,
        logger=flask_app.logger,
        max_code_attempts=int(flask_app.config.get('MAX_CODE_ATTEMPTS', 100)),
        enforce_start_rules=bool(flask_app.config.get('ENFORCE_START_RULES', False)),
        reject_join_after_start=bool(flask_app.config.get('REJECT_JOIN_AFTER_START', False)),
        min_players=int(flask_app.config.get('MIN_PLAYERS', 2)),
    )
    flask_app.extensions['room_broadcaster'] = broadcaster
    flask_app.extensions['room_coordinator'] = coordinator

    from demyati.main import main
    flask_app.register_blueprint(main)

    from demyati.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/rooms')

    # Register Socket.IO event handlers against the initialized socketio instance
    from demyati.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('serve')
    @click.option('--host', default='0.0.0.0', show_default=True, help='Interface to bind.')
    @click.option('--port', type=int, default=None, help='Listen port (defaults to PORT config).')
    def serve_command(host, port):
        """Runs the HTTP + Socket.IO server."""
        port = port or flask_app.config['PORT']
        click.echo(f'Backend server listening on http://{host}:{port}')
        socketio.run(flask_app, host=host, port=port, allow_unsafe_werkzeug=True)

    flask_app.cli.add_command(serve_command)

    return flask_app
