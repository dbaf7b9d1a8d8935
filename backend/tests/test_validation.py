import random

import pytest

from demyati.models import PLAYER_COLORS, generate_room_code, generate_player_id, random_color
from demyati.services.rooms import InvalidPlayer
from demyati.services.rooms.validation import validate_player, sanitize_player, parse_player


@pytest.mark.parametrize('candidate', [
    None,
    {},
    'p1',
    {'id': '', 'name': 'x', 'color': '#fff', 'ready': False},
    {'id': 'x', 'name': '  ', 'color': '#fff', 'ready': False},
    {'id': 'x', 'name': 'X', 'color': '#fff', 'ready': 'yes'},
    {'id': 'x', 'name': 'X', 'color': None, 'ready': False},
    {'id': 7, 'name': 'X', 'color': '#fff', 'ready': False},
])
def test_validate_player_rejects_malformed(candidate):
    assert validate_player(candidate) is False


def test_validate_player_accepts_well_formed():
    assert validate_player({'id': 'p1', 'name': 'Ann', 'color': '#ef4444', 'ready': True}) is True


def test_sanitize_player_coerces_fields():
    assert sanitize_player({'id': 123, 'name': '  Bo  ', 'color': None, 'ready': 'yes'}) == {
        'id': '123',
        'name': 'Bo',
        'color': '#ef4444',
        'ready': True,
        'tile': 1,
        'isHost': False,
    }


def test_sanitize_player_is_total():
    assert sanitize_player(None) == {
        'id': '', 'name': '', 'color': '#ef4444', 'ready': False, 'tile': 1, 'isHost': False,
    }
    assert sanitize_player(['not', 'a', 'player'])['id'] == ''


def test_sanitize_player_keeps_numeric_tile_only():
    assert sanitize_player({'id': 'a', 'tile': 57})['tile'] == 57
    assert sanitize_player({'id': 'a', 'tile': '57'})['tile'] == 1
    assert sanitize_player({'id': 'a', 'tile': True})['tile'] == 1


def test_sanitize_player_is_idempotent():
    once = sanitize_player({'id': 'p9', 'name': ' Zed ', 'color': '#06b6d4', 'ready': 1, 'tile': 12, 'isHost': 'x'})
    assert sanitize_player(once) == once


def test_parse_player_returns_player():
    player = parse_player({'id': 'p1', 'name': ' Ann ', 'color': '#ef4444', 'ready': False, 'tile': 30})
    assert player.id == 'p1'
    assert player.name == 'Ann'
    assert player.tile == 30


def test_parse_player_raises_with_message():
    with pytest.raises(InvalidPlayer) as exc:
        parse_player({}, error='invalid host data')
    assert exc.value.message == 'invalid host data'
    with pytest.raises(InvalidPlayer) as exc:
        parse_player(None)
    assert exc.value.message == 'invalid player data'


def test_generate_room_code_is_four_digits():
    rng = random.Random(0)
    for _ in range(500):
        code = generate_room_code(rng)
        assert len(code) == 4 and code.isdigit()
        assert 1000 <= int(code) <= 9999


def test_generate_player_id_and_color():
    rng = random.Random(0)
    pid = generate_player_id(rng=rng)
    assert len(pid) == 7 and pid.isalnum()
    assert generate_player_id(rng=rng) != pid
    assert random_color(rng) in PLAYER_COLORS
