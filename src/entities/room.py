"""Room and exit entities."""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional


@dataclass
class Exit:
    """A one-way connection out of a room.

    ``condition`` is evaluated against the world when the exit is used; an
    exit without one is always passable.
    """
    destination: str
    condition: Optional[Callable] = None
    message: Optional[str] = None

    def is_passable(self, world) -> bool:
        if self.condition is None:
            return True
        return bool(self.condition(world))


class Room:
    """A location the player can stand in.

    ``object_ids`` lists objects placed directly in the room, in placement
    order. ``ambient_ids`` are objects always associated with the room
    (walls, sky, a house seen from outside) regardless of their location.
    """

    def __init__(self, id, name, description="", exits=None, object_ids=None, ambient_ids=None):
        if not id:
            raise ValueError("Rooms need an id.")
        self.id = id
        self.name = name or id
        self.description = description
        self.exits: Dict[str, Exit] = {}
        for direction, exit_ in (exits or {}).items():
            self.add_exit(direction, exit_)
        self.object_ids: List[str] = list(object_ids or [])
        self.ambient_ids: List[str] = list(ambient_ids or [])
        self.visited = False

    def add_exit(self, direction, exit_):
        if isinstance(exit_, str):
            exit_ = Exit(exit_)
        self.exits[direction.upper()] = exit_

    def get_exit(self, direction) -> Optional[Exit]:
        return self.exits.get(direction.upper())

    def __repr__(self):
        return f"Room({self.id!r}, {self.name!r})"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "exits": {d: e.destination for d, e in self.exits.items()},
            "objects": list(self.object_ids),
            "ambient": list(self.ambient_ids),
        }
