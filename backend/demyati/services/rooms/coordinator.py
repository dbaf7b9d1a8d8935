import logging
import random
import threading
from typing import Any, Dict, Tuple

from demyati.models import Room, BOARD_SIZE, STARTING_TILE, generate_room_code
from .errors import (
    RoomNotFound,
    RoomSpaceExhausted,
    RoomAlreadyStarted,
    StartRejected,
    GameNotStarted,
    NotYourTurn,
)
from .validation import parse_player

UNKNOWN_PLAYER = 'Unknown Player'


class RoomCoordinator:
    """Room/session state machine.

    Rooms go from lobby (``started`` false) to active (``started`` true) and
    end only by deletion. Every operation validates, mutates the store and
    broadcasts while holding one lock, so concurrent handlers never observe
    a partial transition.
    """

    def __init__(
        self,
        store,
        broadcaster,
        rng: random.Random = None,
        logger: logging.Logger = None,
        max_code_attempts: int = 100,
        enforce_start_rules: bool = False,
        reject_join_after_start: bool = False,
        min_players: int = 2,
    ) -> None:
        self.store = store
        self.broadcaster = broadcaster
        self.rng = rng or random.Random()
        self.logger = logger or logging.getLogger(__name__)
        self.max_code_attempts = max_code_attempts
        self.enforce_start_rules = enforce_start_rules
        self.reject_join_after_start = reject_join_after_start
        self.min_players = min_players
        self._lock = threading.RLock()

    # ---- queries ----

    def get_room(self, code: str) -> Room:
        room = self.store.get(code)
        if room is None:
            raise RoomNotFound()
        return room

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            return {code: room.to_dict() for code, room in self.store.get_all().items()}

    # ---- transitions ----

    def create_room(self, host_candidate) -> Room:
        with self._lock:
            host = parse_player(host_candidate, error='invalid host data')
            code = self._allocate_code()
            host.tile = STARTING_TILE
            room = Room(code=code, host_id=host.id, players=[host])
            self.store.set(code, room)
            self.logger.info(f"[create] room={code} host={host.id} name={host.name!r} total_rooms={len(self.store)}")
            self._publish()
            return room

    def join_room(self, code: str, candidate) -> Room:
        with self._lock:
            room = self.get_room(code)
            player = parse_player(candidate)
            reconnecting = room.find_player(player.id) is not None
            if room.started and self.reject_join_after_start and not reconnecting:
                raise RoomAlreadyStarted()
            room.players = [p for p in room.players if p.id != player.id]
            player.tile = STARTING_TILE
            room.players.append(player)
            self._ensure_turn(room)
            self.store.set(code, room)
            self.logger.info(
                f"[join] room={code} player={player.id} name={player.name!r} "
                f"{'rejoined' if reconnecting else 'joined'} players={len(room.players)}"
            )
            self._publish()
            self.broadcaster.player_joined(player.name, code)
            return room

    def leave_room(self, code: str, player_id: str) -> Dict[str, bool]:
        with self._lock:
            room = self.store.get(code)
            if room is None:
                self.logger.info(f"[leave] room={code} player={player_id} room not found")
                raise RoomNotFound()
            leaving = room.find_player(player_id)
            name = leaving.name if leaving else UNKNOWN_PLAYER
            idx = room.index_of(player_id)
            room.players = [p for p in room.players if p.id != player_id]
            if room.current_player_id == player_id:
                # The follower of the departing holder now sits at the same index
                room.current_player_id = (
                    room.players[idx % len(room.players)].id if room.players and idx is not None else None
                )

            if room.host_id == player_id and not room.players:
                self.store.delete(code)
                self.logger.info(f"[delete] room={code} host left with no players remaining total_rooms={len(self.store)}")
            else:
                self.store.set(code, room)
                self.logger.info(f"[leave] room={code} player={player_id} name={name!r} remaining={len(room.players)}")
            self._publish()
            self.broadcaster.player_left(name, code)
            return {'ok': True}

    def update_player(self, code: str, candidate) -> Room:
        with self._lock:
            room = self.get_room(code)
            player = parse_player(candidate)
            room.players = [player if p.id == player.id else p for p in room.players]
            self.store.set(code, room)
            self.logger.debug(f"[update] room={code} player={player.id} ready={player.ready} tile={player.tile}")
            self._publish()
            return room

    def start_game(self, code: str) -> Room:
        with self._lock:
            room = self.get_room(code)
            if self.enforce_start_rules:
                if len(room.players) < self.min_players or not all(p.ready for p in room.players):
                    raise StartRejected(
                        f'need at least {self.min_players} players and everyone must be ready'
                    )
            room.started = True
            self._ensure_turn(room)
            self.store.set(code, room)
            self.logger.info(f"[start] room={code} players={len(room.players)} first_turn={room.current_player_id}")
            self._publish()
            return room

    def roll_dice(self, code: str, player_id: str) -> Tuple[int, Room]:
        with self._lock:
            room = self.get_room(code)
            if not room.started:
                raise GameNotStarted()
            player = room.find_player(player_id)
            if player is None or room.current_player_id != player_id:
                raise NotYourTurn()

            roll = self.rng.randint(1, 6) + self.rng.randint(1, 6)
            target = player.tile + roll
            moved = target <= BOARD_SIZE
            if moved:
                player.tile = target
            room.last_roll = {'playerId': player_id, 'diceRoll': roll, 'moved': moved}

            idx = room.index_of(player_id)
            room.current_player_id = room.players[(idx + 1) % len(room.players)].id
            self.store.set(code, room)
            self.logger.info(
                f"[roll] room={code} player={player_id} roll={roll} tile={player.tile} "
                f"moved={moved} next={room.current_player_id}"
            )
            self._publish()
            return roll, room

    def player_disconnected(self, code: str, player_id: str) -> bool:
        """Announce a dropped connection. The player stays in the room."""
        with self._lock:
            room = self.store.get(code)
            if room is None:
                return False
            player = room.find_player(player_id)
            name = player.name if player else UNKNOWN_PLAYER
            self.logger.info(f"[disconnect] room={code} player={player_id} name={name!r}")
            self.broadcaster.player_left(name, code)
            return True

    # ---- helpers ----

    def _allocate_code(self) -> str:
        for _ in range(self.max_code_attempts):
            code = generate_room_code(self.rng)
            if code not in self.store:
                return code
        self.logger.warning(f"[create] no free room code after {self.max_code_attempts} attempts")
        raise RoomSpaceExhausted()

    def _ensure_turn(self, room: Room) -> None:
        if not room.started:
            return
        if room.current_player_id is None or room.find_player(room.current_player_id) is None:
            room.current_player_id = room.players[0].id if room.players else None

    def _publish(self) -> None:
        self.broadcaster.publish_snapshot(
            {code: room.to_dict() for code, room in self.store.get_all().items()}
        )
