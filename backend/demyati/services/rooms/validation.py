from collections.abc import Mapping
from numbers import Number
from typing import Any, Dict

from demyati.models import Player, DEFAULT_COLOR, STARTING_TILE
from .errors import InvalidPlayer


def validate_player(candidate: Any) -> bool:
    """Return True if ``candidate`` has the shape of a player payload.

    Requires a non-empty string ``id``, a string ``name`` that is non-empty
    once trimmed, a string ``color`` and a boolean ``ready``.
    """
    if not isinstance(candidate, Mapping):
        return False
    pid = candidate.get('id')
    name = candidate.get('name')
    return (
        isinstance(pid, str)
        and isinstance(name, str)
        and isinstance(candidate.get('color'), str)
        and isinstance(candidate.get('ready'), bool)
        and len(pid) > 0
        and len(name.strip()) > 0
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def sanitize_player(candidate: Any) -> Dict[str, Any]:
    """Coerce a player payload into the stored shape. Never raises."""
    if not isinstance(candidate, Mapping):
        candidate = {}
    pid = candidate.get('id')
    name = candidate.get('name')
    color = candidate.get('color')
    tile = candidate.get('tile')
    return {
        'id': str(pid) if pid else '',
        'name': (str(name) if name else '').strip(),
        'color': str(color) if color else DEFAULT_COLOR,
        'ready': bool(candidate.get('ready')),
        'tile': tile if _is_number(tile) else STARTING_TILE,
        'isHost': bool(candidate.get('isHost')),
    }


def parse_player(candidate: Any, error: str = None) -> Player:
    """Validate and sanitize ``candidate`` into a Player.

    Raises InvalidPlayer (with ``error`` as the client message when given).
    """
    if not validate_player(candidate):
        raise InvalidPlayer(error)
    return Player.from_dict(sanitize_player(candidate))
