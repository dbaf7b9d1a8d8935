import os
import random
import sys
import pytest

# Ensure the backend root (containing the `demyati` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from demyati import create_app, socketio
from demyati.services.rooms import RoomStore, RoomCoordinator


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    PORT = 4000
    CORS_ORIGINS = '*'
    LOG_LEVEL = 'DEBUG'
    MAX_CODE_ATTEMPTS = 100
    MIN_PLAYERS = 2
    ENFORCE_START_RULES = False
    REJECT_JOIN_AFTER_START = False
    RNG_SEED = 1234


class RecordingBroadcaster:
    """Stands in for the Socket.IO broadcaster and remembers every emit."""

    def __init__(self):
        self.snapshots = []
        self.messages = []

    def publish_snapshot(self, snapshot):
        self.snapshots.append(snapshot)

    def player_joined(self, player_name, room_code):
        self.messages.append(('joined', player_name, room_code))

    def player_left(self, player_name, room_code):
        self.messages.append(('left', player_name, room_code))


def make_player(pid, name=None, color='#ef4444', ready=False, **extra):
    player = {'id': pid, 'name': name or pid.upper(), 'color': color, 'ready': ready}
    player.update(extra)
    return player


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def store():
    return RoomStore()


@pytest.fixture()
def coordinator(store, broadcaster):
    return RoomCoordinator(store, broadcaster, rng=random.Random(42))


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
    )
    yield test_client
    try:
        test_client.disconnect()
    except Exception:
        pass
