import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Listen port for the HTTP + Socket.IO server
    PORT = int(os.environ.get('PORT', '4000'))
    # Base URL the client adapter uses to reach the server
    BACKEND_URL = os.environ.get('BACKEND_URL') or f"http://localhost:{PORT}"
    # Comma separated; '*' allows any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Upper bound on room-code resampling before giving up
    MAX_CODE_ATTEMPTS = int(os.environ.get('MAX_CODE_ATTEMPTS', '100'))
    # Minimum players (only checked when ENFORCE_START_RULES is on)
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '2'))
    # Optional: server-side "enough players, all ready" gate on start. Off by default.
    ENFORCE_START_RULES = os.environ.get('ENFORCE_START_RULES', '0') == '1'
    # Optional: refuse newcomers once a room has started. Off by default.
    REJECT_JOIN_AFTER_START = os.environ.get('REJECT_JOIN_AFTER_START', '0') == '1'
    # Optional: seed for room codes and dice (reproducible runs)
    RNG_SEED = int(os.environ['RNG_SEED']) if os.environ.get('RNG_SEED') else None
