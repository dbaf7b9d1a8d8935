import random
import string

BOARD_SIZE = 200
STARTING_TILE = 1
DEFAULT_COLOR = '#ef4444'
PLAYER_COLORS = (
    '#ef4444',  # red
    '#f59e0b',  # amber
    '#84cc16',  # lime
    '#06b6d4',  # cyan
    '#6366f1',  # indigo
    '#ec4899',  # pink
)


def generate_room_code(rng=random):
    """Generate a 4-digit room code in 1000-9999."""
    return str(rng.randint(1000, 9999))


def generate_player_id(length=7, rng=random):
    """Generate a short opaque player id."""
    return ''.join(rng.choices(string.ascii_lowercase + string.digits, k=length))


def random_color(rng=random):
    return rng.choice(PLAYER_COLORS)


class Player:
    def __init__(self, id, name, color=DEFAULT_COLOR, ready=False, tile=STARTING_TILE, is_host=False):
        self.id = id
        self.name = name
        self.color = color
        self.ready = ready
        self.tile = tile
        self.is_host = is_host

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            name=data['name'],
            color=data['color'],
            ready=data['ready'],
            tile=data['tile'],
            is_host=data['isHost'],
        )

    def to_dict(self, host_id=None):
        return {
            'id': self.id,
            'name': self.name,
            'color': self.color,
            'ready': self.ready,
            'tile': self.tile,
            # Derived from the room; the stored flag is whatever the client sent
            'isHost': self.id == host_id if host_id is not None else self.is_host,
        }

    def __repr__(self):
        return f"<Player {self.id} {self.name!r} tile={self.tile}>"


class Room:
    def __init__(self, code, host_id, players=None, started=False):
        self.code = code
        self.host_id = host_id
        self.players = list(players or [])
        self.started = started
        self.current_player_id = None
        self.last_roll = None

    def find_player(self, player_id):
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def index_of(self, player_id):
        for idx, p in enumerate(self.players):
            if p.id == player_id:
                return idx
        return None

    @property
    def turn_order(self):
        return [p.id for p in self.players]

    @property
    def current_player_index(self):
        if self.current_player_id is None:
            return None
        return self.index_of(self.current_player_id)

    def to_dict(self):
        return {
            'code': self.code,
            'players': [p.to_dict(host_id=self.host_id) for p in self.players],
            'started': self.started,
            'hostId': self.host_id,
            'currentPlayerId': self.current_player_id,
            'turnOrder': self.turn_order,
            'currentPlayerIndex': self.current_player_index,
            'lastRoll': dict(self.last_roll) if self.last_roll else None,
        }

    def __repr__(self):
        return f"<Room {self.code} players={len(self.players)} started={self.started}>"
