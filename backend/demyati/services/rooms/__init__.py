"""Room domain services: validation, storage, transitions and fan-out.

Everything here is transport-agnostic. HTTP routes and Socket.IO handlers
call into the coordinator and translate ``RoomError`` into their own
response shapes.
"""

from .errors import (
    RoomError,
    InvalidPlayer,
    RoomNotFound,
    RoomSpaceExhausted,
    RoomAlreadyStarted,
    StartRejected,
    GameNotStarted,
    NotYourTurn,
)
from .store import RoomStore
from .broadcast import SocketIOBroadcaster
from .coordinator import RoomCoordinator
