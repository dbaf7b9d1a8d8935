class RoomError(Exception):
    """Base class for room-domain errors.

    ``message`` is the short string sent back to clients.
    """

    message = 'room error'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidPlayer(RoomError):
    message = 'invalid player data'


class RoomNotFound(RoomError):
    message = 'not found'


class RoomSpaceExhausted(RoomError):
    message = 'no room codes available'


class RoomAlreadyStarted(RoomError):
    message = 'game already started'


class StartRejected(RoomError):
    message = 'need at least 2 players and everyone must be ready'


class GameNotStarted(RoomError):
    message = 'game not started'


class NotYourTurn(RoomError):
    message = 'not your turn'
