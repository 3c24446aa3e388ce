"""WorldModel: rooms, objects and the containment tree."""

from typing import Dict, List, Optional

from core.logger import parser_logger
from entities.item import WorldObject, ObjectFlag, HELD, NOWHERE
from entities.room import Room, Exit


class ContainmentError(ValueError):
    """Raised when a move would break the containment tree."""

    def __init__(self, object_id, destination, reason):
        self.object_id = object_id
        self.destination = destination
        self.reason = reason
        super().__init__(f"Cannot move {object_id!r} to {destination!r}: {reason}")


class WorldModel:
    """Holds one session's rooms and objects.

    Every object has a single location; rooms keep an ordered list of the
    objects placed directly in them. Reachability is computed fresh on each
    call because openness and locations change between turns.
    """

    def __init__(self, rooms=None, objects=None, start_room=None):
        self.rooms: Dict[str, Room] = {}
        self.objects: Dict[str, WorldObject] = {}
        self.flags = set()  # world-level story flags used by exit conditions
        self.current_room_id: Optional[str] = None
        self._initial_placements: Dict[str, str] = {}

        for room in rooms or []:
            self.add_room(room)
        for obj in objects or []:
            self.add_object(obj)
        if start_room:
            self.enter_room(start_room)

    # --- construction -------------------------------------------------

    def add_room(self, room: Room):
        if room.id in self.rooms or room.id in self.objects or room.id in (HELD, NOWHERE):
            raise ValueError(f"Duplicate id: {room.id!r}")
        # Objects listed on the room are placed as they get registered
        for object_id in room.object_ids:
            if object_id in self.objects:
                raise ValueError(f"Object {object_id!r} is already placed; list it before adding it.")
            self._initial_placements[object_id] = room.id
        room.object_ids = []
        self.rooms[room.id] = room
        return room

    def add_object(self, obj: WorldObject):
        """Register an object and place it at its declared location."""
        if obj.id in self.objects or obj.id in self.rooms or obj.id in (HELD, NOWHERE):
            raise ValueError(f"Duplicate id: {obj.id!r}")
        location = obj.location
        if location == NOWHERE:
            location = self._initial_placements.pop(obj.id, NOWHERE)
        obj.location = NOWHERE
        self.objects[obj.id] = obj
        if location != NOWHERE:
            try:
                self.move_object(obj.id, location)
            except (ContainmentError, KeyError):
                del self.objects[obj.id]
                raise
        return obj

    # --- lookups ------------------------------------------------------

    def get_object(self, object_id) -> WorldObject:
        try:
            return self.objects[object_id]
        except KeyError:
            raise KeyError(f"Unknown object: {object_id!r}")

    def get_room(self, room_id) -> Room:
        try:
            return self.rooms[room_id]
        except KeyError:
            raise KeyError(f"Unknown room: {room_id!r}")

    @property
    def current_room(self) -> Optional[Room]:
        if self.current_room_id is None:
            return None
        return self.rooms.get(self.current_room_id)

    def enter_room(self, room_id):
        room = self.get_room(room_id)
        self.current_room_id = room.id
        room.visited = True
        parser_logger.info(f"Entered room {room.id}")
        return room

    def location_of(self, object_id) -> str:
        return self.get_object(object_id).location

    def contents_of(self, location_id) -> List[WorldObject]:
        """Objects located directly in a room, container, or HELD."""
        if location_id in self.rooms:
            return [self.objects[oid] for oid in self.rooms[location_id].object_ids]
        return [obj for obj in self.objects.values() if obj.location == location_id]

    def inventory(self) -> List[WorldObject]:
        return self.contents_of(HELD)

    def room_of(self, object_id) -> Optional[str]:
        """Walk up the containment chain to the enclosing room, if any."""
        location = self.location_of(object_id)
        seen = set()
        while location in self.objects and location not in seen:
            seen.add(location)
            location = self.objects[location].location
        return location if location in self.rooms else None

    # --- mutation -----------------------------------------------------

    def _ownership_chain(self, location):
        """Yield ``location`` and every container above it."""
        while location in self.objects:
            yield location
            location = self.objects[location].location

    def move_object(self, object_id, destination):
        """Move an object, keeping containment a tree.

        ``destination`` is a room id, a container object id, HELD or NOWHERE.
        Raises ContainmentError if the object would end up inside itself or
        the destination object is not a container.
        """
        obj = self.get_object(object_id)
        if destination not in (HELD, NOWHERE) and destination not in self.rooms:
            if destination not in self.objects:
                raise KeyError(f"Unknown location: {destination!r}")
            if not self.objects[destination].is_container():
                parser_logger.info(f"Rejected move {object_id} -> {destination}: not a container")
                raise ContainmentError(object_id, destination, "destination is not a container")
            if object_id in self._ownership_chain(destination):
                parser_logger.info(f"Rejected move {object_id} -> {destination}: cycle")
                raise ContainmentError(object_id, destination, "an object cannot be inside itself")

        previous = obj.location
        if previous in self.rooms:
            room = self.rooms[previous]
            if object_id in room.object_ids:
                room.object_ids.remove(object_id)
        obj.location = destination
        if destination in self.rooms:
            self.rooms[destination].object_ids.append(object_id)
        parser_logger.info(f"Moved {object_id}: {previous} -> {destination}")

    def set_object_flag(self, object_id, flag, value=True):
        obj = self.get_object(object_id)
        flag = ObjectFlag.parse(flag)
        if value:
            obj.flags.add(flag)
        else:
            obj.flags.discard(flag)

    def set_flag(self, name, value=True):
        if value:
            self.flags.add(name)
        else:
            self.flags.discard(name)

    def has_flag(self, name):
        return name in self.flags

    # --- exits --------------------------------------------------------

    def find_exit(self, direction, room_id=None) -> Optional[Exit]:
        room = self.get_room(room_id or self.current_room_id)
        return room.get_exit(direction)

    def exit_destination(self, direction, room_id=None) -> Optional[str]:
        """Destination through an exit, or None if missing or blocked."""
        exit_ = self.find_exit(direction, room_id)
        if exit_ is None or not exit_.is_passable(self):
            return None
        return exit_.destination

    # --- reachability -------------------------------------------------

    def reachable_objects(self) -> List[WorldObject]:
        """Objects the player may refer to this turn.

        Held objects, objects in the current room, the room's ambient objects
        and location-less global objects, plus the contents of every open
        container among them (recursively). Closed containers hide their
        contents. Invisible objects are never included.
        """
        found: Dict[str, WorldObject] = {}
        pending: List[WorldObject] = []

        def visit(obj):
            if obj is None or obj.id in found or ObjectFlag.INVISIBLE in obj.flags:
                return
            found[obj.id] = obj
            pending.append(obj)

        for obj in self.inventory():
            visit(obj)

        room = self.current_room
        if room is not None:
            for object_id in room.object_ids:
                visit(self.objects.get(object_id))
            for object_id in room.ambient_ids:
                visit(self.objects.get(object_id))

        for obj in self.objects.values():
            if obj.location == NOWHERE and ObjectFlag.GLOBAL in obj.flags:
                visit(obj)

        while pending:
            container = pending.pop(0)
            if container.is_container() and container.is_open():
                for inner in self.contents_of(container.id):
                    visit(inner)

        return list(found.values())

    def is_reachable(self, object_id) -> bool:
        return any(obj.id == object_id for obj in self.reachable_objects())

    # --- serialization ------------------------------------------------

    def to_dict(self):
        return {
            "current_room": self.current_room_id,
            "flags": sorted(self.flags),
            "rooms": [room.to_dict() for room in self.rooms.values()],
            "objects": [obj.to_dict() for obj in self.objects.values()],
        }
