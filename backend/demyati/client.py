"""Client adapter for the room server.

Mirrors the server surface for UI code: HTTP for listing and creating
rooms, Socket.IO for everything else, plus listener registration for the
``rooms:update`` snapshot and the ``player:joined``/``player:left``
notifications.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

import requests
import socketio

from config import Config

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_URL = Config.BACKEND_URL


class RoomsClientError(Exception):
    pass


def unpack_ack(result: Any) -> Tuple[Any, Any]:
    """Split an ack into (error, payload).

    Success acks carry two arguments ``(None, payload)``; failures carry a
    single ``{'error': ...}`` argument.
    """
    if isinstance(result, (list, tuple)):
        if not result:
            return None, None
        return result[0], (result[1] if len(result) > 1 else None)
    return result, None


class RoomsClient:
    def __init__(self, base_url: str = DEFAULT_BACKEND_URL, timeout: float = 10.0, sio: socketio.Client = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.sio = sio or socketio.Client()
        self.last_rooms: Optional[Dict[str, Any]] = None
        self._listeners = []
        self._message_listeners = []
        self.sio.on('connect', self._handle_connect)
        self.sio.on('disconnect', self._handle_disconnect)
        self.sio.on('rooms:update', self._handle_rooms_update)
        self.sio.on('player:joined', self._handle_player_joined)
        self.sio.on('player:left', self._handle_player_left)

    # ---- connection ----

    def ensure_connected(self) -> socketio.Client:
        if not self.sio.connected:
            logger.info(f"[rooms] connecting to {self.base_url}")
            self.sio.connect(self.base_url)
        return self.sio

    def disconnect(self) -> None:
        if self.sio.connected:
            self.sio.disconnect()

    def _handle_connect(self):
        logger.info("[rooms] socket connected")
        # Ask for the full snapshot right away
        self.sio.emit('rooms:list')

    def _handle_disconnect(self, *args):
        logger.info("[rooms] socket disconnected")

    def _handle_rooms_update(self, rooms):
        logger.debug(f"[rooms] received rooms update ({len(rooms or {})} rooms)")
        self.last_rooms = rooms
        for cb in list(self._listeners):
            cb(rooms)

    def _handle_player_joined(self, data):
        self._dispatch_message('joined', data)

    def _handle_player_left(self, data):
        self._dispatch_message('left', data)

    def _dispatch_message(self, kind, data):
        message = {'type': kind, 'playerName': (data or {}).get('playerName'), 'roomCode': (data or {}).get('roomCode')}
        for cb in list(self._message_listeners):
            cb(message)

    # ---- HTTP ----

    def list_rooms(self) -> Dict[str, Any]:
        res = requests.get(f"{self.base_url}/rooms", timeout=self.timeout)
        if not res.ok:
            return {}
        return res.json()

    def get_room(self, code: str) -> Optional[Dict[str, Any]]:
        res = requests.get(f"{self.base_url}/rooms/{code}", timeout=self.timeout)
        if res.status_code == 404:
            return None
        if not res.ok:
            raise RoomsClientError(f"fetch failed: {res.status_code}")
        return res.json()

    def test_connection(self) -> bool:
        try:
            return requests.get(f"{self.base_url}/rooms", timeout=self.timeout).ok
        except requests.RequestException as exc:
            logger.error(f"[rooms] backend connection test failed: {exc}")
            return False

    def create_room(self, host: Dict[str, Any]) -> str:
        if not self.test_connection():
            raise RoomsClientError(f"backend server is not available at {self.base_url}")
        try:
            res = requests.post(f"{self.base_url}/rooms", json={'host': host}, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RoomsClientError(f"cannot connect to backend server at {self.base_url}") from exc
        if res.status_code != 201:
            raise RoomsClientError(f"createRoom failed: {res.status_code} {res.text}")
        code = res.json()['code']
        logger.info(f"[rooms] created room {code}")
        return code

    # ---- Socket.IO ----

    def _call(self, event: str, *args):
        return unpack_ack(self.ensure_connected().call(event, args, timeout=self.timeout))

    def join_room(self, code: str, player: Dict[str, Any]) -> bool:
        try:
            err, _ = self._call('rooms:join', code, player)
        except socketio.exceptions.SocketIOError as exc:
            logger.warning(f"[rooms] join {code} got no ack ({exc!r}), checking room over HTTP")
            return self._join_fallback(code, player)
        if err:
            logger.warning(f"[rooms] join {code} failed: {err}")
        return not err

    def _join_fallback(self, code: str, player: Dict[str, Any]) -> bool:
        try:
            if self.get_room(code) is None:
                return False
        except (requests.RequestException, RoomsClientError) as exc:
            logger.error(f"[rooms] join fallback for {code} failed: {exc}")
            return False
        # No ack, but the room exists: resend the player record and treat it as joined
        try:
            self.sio.emit('rooms:updatePlayer', (code, player))
        except socketio.exceptions.SocketIOError as exc:
            logger.error(f"[rooms] join fallback emit for {code} failed: {exc}")
        return True

    def leave_room(self, code: str, player_id: str) -> None:
        self.ensure_connected().emit('rooms:leave', (code, player_id))

    def update_player(self, code: str, player: Dict[str, Any]) -> None:
        self.ensure_connected().emit('rooms:updatePlayer', (code, player))

    def start_game(self, code: str) -> None:
        self.ensure_connected().emit('rooms:start', code)

    def roll_dice(self, code: str, player_id: str) -> int:
        err, payload = self._call('rooms:rollDice', code, player_id)
        if err:
            raise RoomsClientError(err.get('error') if isinstance(err, dict) else str(err))
        return payload['diceRoll']

    # ---- listeners ----

    def on_rooms_update(self, cb: Callable[[Dict[str, Any]], None]) -> Callable[[], None]:
        self._listeners.append(cb)
        # Replay the latest snapshot to late subscribers
        if self.last_rooms is not None:
            cb(self.last_rooms)
        self.ensure_connected()
        return lambda: self._listeners.remove(cb) if cb in self._listeners else None

    def on_player_message(self, cb: Callable[[Dict[str, Any]], None]) -> Callable[[], None]:
        self._message_listeners.append(cb)
        self.ensure_connected()
        return lambda: self._message_listeners.remove(cb) if cb in self._message_listeners else None
