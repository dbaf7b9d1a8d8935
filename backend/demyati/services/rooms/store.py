from typing import Dict, Optional

from demyati.models import Room


class RoomStore:
    """In-memory map of room code to Room.

    Holds no transition logic; the coordinator is the only writer.
    """

    def __init__(self) -> None:
        self._rooms: Dict[str, Room] = {}

    def get(self, code: str) -> Optional[Room]:
        return self._rooms.get(code)

    def get_all(self) -> Dict[str, Room]:
        return dict(self._rooms)

    def set(self, code: str, room: Room) -> None:
        self._rooms[code] = room

    def delete(self, code: str) -> None:
        self._rooms.pop(code, None)

    def __contains__(self, code) -> bool:
        return code in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)
