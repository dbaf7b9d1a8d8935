from flask import Blueprint, jsonify, request, current_app
from demyati import get_coordinator
from demyati.services.rooms import InvalidPlayer, RoomNotFound, RoomSpaceExhausted


rooms = Blueprint('rooms', __name__)


@rooms.route('', methods=['GET'])
def list_rooms():
    return jsonify(get_coordinator().snapshot())


@rooms.route('/<string:code>', methods=['GET'])
def get_room(code):
    try:
        room = get_coordinator().get_room(code)
    except RoomNotFound as exc:
        return jsonify({'error': exc.message}), 404
    return jsonify(room.to_dict())


@rooms.route('', methods=['POST'])
def create_room():
    data = request.get_json(silent=True) or {}
    host = data.get('host') if isinstance(data, dict) else None
    if not host:
        return jsonify({'error': 'missing or invalid host'}), 400
    try:
        room = get_coordinator().create_room(host)
    except InvalidPlayer:
        return jsonify({'error': 'missing or invalid host'}), 400
    except RoomSpaceExhausted as exc:
        current_app.logger.error(f"[create] rejected: {exc.message}")
        return jsonify({'error': exc.message}), 503
    return jsonify(room.to_dict()), 201
