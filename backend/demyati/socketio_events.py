from flask import current_app, request
from demyati import socketio, get_coordinator, get_broadcaster
from demyati.services.rooms import RoomError

NAMESPACE = '/'


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _code(code) -> str:
    return str(code) if code is not None else ''


def _reject(event: str, exc: RoomError):
    current_app.logger.info(f"[{event}] sid={_get_sid()} rejected: {exc.message}")
    # Single-argument ack: the client callback receives (error)
    return {'error': exc.message}


def handle_connect(auth=None):
    get_broadcaster().subscribe(_get_sid())


def handle_disconnect(reason=None):
    # Keep the player in the room so they can rejoin; only announce the drop
    ctx = get_broadcaster().unsubscribe(_get_sid())
    if not ctx:
        return
    get_coordinator().player_disconnected(ctx['room_code'], ctx['player_id'])


def handle_rooms_list(*_):
    get_broadcaster().send_snapshot(get_coordinator().snapshot(), _get_sid())


def handle_rooms_create(host=None):
    try:
        room = get_coordinator().create_room(host)
    except RoomError as exc:
        return _reject('rooms:create', exc)
    get_broadcaster().track(_get_sid(), room.code, room.host_id)
    return None, room.to_dict()


def handle_rooms_join(code=None, player=None):
    try:
        room = get_coordinator().join_room(_code(code), player)
    except RoomError as exc:
        return _reject('rooms:join', exc)
    get_broadcaster().track(_get_sid(), room.code, player['id'])
    return None, room.to_dict()


def handle_rooms_leave(code=None, player_id=None):
    try:
        result = get_coordinator().leave_room(_code(code), player_id)
    except RoomError as exc:
        return _reject('rooms:leave', exc)
    get_broadcaster().untrack(_get_sid())
    return None, result


def handle_rooms_update_player(code=None, player=None):
    try:
        room = get_coordinator().update_player(_code(code), player)
    except RoomError as exc:
        return _reject('rooms:updatePlayer', exc)
    return None, room.to_dict()


def handle_rooms_start(code=None):
    try:
        room = get_coordinator().start_game(_code(code))
    except RoomError as exc:
        return _reject('rooms:start', exc)
    return None, room.to_dict()


def handle_rooms_roll_dice(code=None, player_id=None):
    try:
        roll, room = get_coordinator().roll_dice(_code(code), player_id)
    except RoomError as exc:
        return _reject('rooms:rollDice', exc)
    return None, {'diceRoll': roll, 'room': room.to_dict()}


def register_socketio_handlers(namespace: str = NAMESPACE) -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('rooms:list', handle_rooms_list, namespace=namespace)
    socketio.on_event('rooms:create', handle_rooms_create, namespace=namespace)
    socketio.on_event('rooms:join', handle_rooms_join, namespace=namespace)
    socketio.on_event('rooms:leave', handle_rooms_leave, namespace=namespace)
    socketio.on_event('rooms:updatePlayer', handle_rooms_update_player, namespace=namespace)
    socketio.on_event('rooms:start', handle_rooms_start, namespace=namespace)
    socketio.on_event('rooms:rollDice', handle_rooms_roll_dice, namespace=namespace)
