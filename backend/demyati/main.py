from flask import Blueprint, jsonify
from demyati import get_coordinator, get_broadcaster

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Demyati game server!'})

@main.route('/health')
def health():
    return jsonify({
        'status': 'ok',
        'rooms': len(get_coordinator().store),
        'subscribers': get_broadcaster().subscriber_count,
    })
