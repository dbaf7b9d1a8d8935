from typing import Any, Dict, Optional

ROOMS_UPDATE = 'rooms:update'
PLAYER_JOINED = 'player:joined'
PLAYER_LEFT = 'player:left'


class SocketIOBroadcaster:
    """Fan-out of room state to every connected Socket.IO client.

    Clients always receive the whole snapshot and index it by their own
    room code; there is no per-room filtering. Each subscribed sid may
    carry the room/player it last created or joined so the disconnect
    handler can announce who dropped.
    """

    def __init__(self, socketio, namespace: str = '/') -> None:
        self.socketio = socketio
        self.namespace = namespace
        self._subscribers: Dict[str, Optional[Dict[str, str]]] = {}

    # ---- subscriber tracking ----

    def subscribe(self, sid: str) -> None:
        self._subscribers.setdefault(sid, None)

    def unsubscribe(self, sid: str) -> Optional[Dict[str, str]]:
        return self._subscribers.pop(sid, None)

    def track(self, sid: str, room_code: str, player_id: str) -> None:
        self._subscribers[sid] = {'room_code': room_code, 'player_id': player_id}

    def untrack(self, sid: str) -> None:
        if sid in self._subscribers:
            self._subscribers[sid] = None

    def context(self, sid: str) -> Optional[Dict[str, str]]:
        return self._subscribers.get(sid)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    # ---- emitters ----

    def publish_snapshot(self, snapshot: Dict[str, Any]) -> None:
        self.socketio.emit(ROOMS_UPDATE, snapshot, namespace=self.namespace)

    def send_snapshot(self, snapshot: Dict[str, Any], sid: str) -> None:
        self.socketio.emit(ROOMS_UPDATE, snapshot, to=sid, namespace=self.namespace)

    def player_joined(self, player_name: str, room_code: str) -> None:
        self.socketio.emit(PLAYER_JOINED, {'playerName': player_name, 'roomCode': room_code}, namespace=self.namespace)

    def player_left(self, player_name: str, room_code: str) -> None:
        self.socketio.emit(PLAYER_LEFT, {'playerName': player_name, 'roomCode': room_code}, namespace=self.namespace)
