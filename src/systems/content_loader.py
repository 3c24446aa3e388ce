"""
Content Loader
Builds a WorldModel and a matching VocabularyTable from a JSON world file.

World file layout::

    {
      "start_room": "west_of_house",
      "rooms": [{"id", "name", "description", "exits", "objects", "ambient"}],
      "objects": [{"id", "name", "synonyms", "adjectives", "location",
                   "flags", "description"}],
      "vocabulary": {"nouns", "adjectives", "synonyms", "verbs", "verbatim"}
    }

An exit is either a destination id or an object with ``to`` plus optional
``requires_open`` (an object id that must be open), ``requires_flag`` (a
world flag that must be set) and ``message`` (shown when blocked).
"""

import json
import os
from typing import Dict, Iterable, List, Optional, Tuple

from core.logger import parser_logger
from entities.item import WorldObject, HELD, NOWHERE
from entities.room import Room, Exit
from entities.world_map import WorldModel, ContainmentError
from systems.vocabulary import VocabularyTable

DEFAULT_WORLD_FILE = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data", "world.json")

REQUIRED_FIELDS = ["start_room", "rooms", "objects"]
REQUIRED_ROOM_FIELDS = ["id", "name"]
REQUIRED_OBJECT_FIELDS = ["id", "name"]


class ContentError(ValueError):
    """Raised for a world file that cannot be turned into a world."""


def validate_world_data(data, required_fields=None) -> tuple:
    """
    Validate world data structure.

    Returns:
        (is_valid: bool, error_message: str or None)
    """
    if not isinstance(data, dict):
        return False, "World data is not a valid dictionary"

    required = required_fields if required_fields is not None else REQUIRED_FIELDS
    missing = [field for field in required if field not in data]
    if missing:
        return False, f"Missing required fields: {', '.join(missing)}"

    if not isinstance(data["rooms"], list) or not isinstance(data["objects"], list):
        return False, "'rooms' and 'objects' must be lists"

    for kind, entries, fields in (("room", data["rooms"], REQUIRED_ROOM_FIELDS),
                                  ("object", data["objects"], REQUIRED_OBJECT_FIELDS)):
        seen = set()
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                return False, f"{kind} #{index} is not a dictionary"
            missing = [field for field in fields if not entry.get(field)]
            if missing:
                return False, f"{kind} #{index} is missing required fields: {', '.join(missing)}"
            if entry["id"] in seen:
                return False, f"Duplicate {kind} id: {entry['id']}"
            seen.add(entry["id"])

    room_ids = {room["id"] for room in data["rooms"]}
    object_ids = {obj["id"] for obj in data["objects"]}
    clashes = room_ids & object_ids
    if clashes:
        return False, f"Ids used by both a room and an object: {', '.join(sorted(clashes))}"

    if data["start_room"] not in room_ids:
        return False, f"Unknown start room: {data['start_room']}"

    return True, None


def _words(phrases: Iterable[str]) -> List[str]:
    """Split possibly multi-word phrases into single upper-case words."""
    words = []
    for phrase in phrases:
        words.extend(str(phrase).upper().split())
    return words


def _exit_condition(exit_data: dict, object_ids):
    requires_open = exit_data.get("requires_open")
    requires_flag = exit_data.get("requires_flag")
    if requires_open and requires_open not in object_ids:
        raise ContentError(f"Exit requires unknown object: {requires_open}")
    if not requires_open and not requires_flag:
        return None

    def condition(world):
        if requires_open and not world.get_object(requires_open).is_open():
            return False
        if requires_flag and not world.has_flag(requires_flag):
            return False
        return True

    return condition


def _build_exit(direction, exit_data, room_ids, object_ids, vocabulary) -> Tuple[str, Exit]:
    canonical = vocabulary.expand(direction)
    if isinstance(exit_data, str):
        exit_data = {"to": exit_data}
    if not isinstance(exit_data, dict) or not exit_data.get("to"):
        raise ContentError(f"Exit {direction!r} needs a destination")
    if exit_data["to"] not in room_ids:
        raise ContentError(f"Exit {direction!r} leads to unknown room: {exit_data['to']}")
    return canonical, Exit(exit_data["to"], _exit_condition(exit_data, object_ids), exit_data.get("message"))


def build_vocabulary(data: dict, vocabulary: Optional[VocabularyTable] = None) -> VocabularyTable:
    """Extend ``vocabulary`` with every word the world's objects answer to."""
    base = vocabulary or VocabularyTable.default()
    section = data.get("vocabulary") or {}

    nouns: Dict[str, List[str]] = {}
    listed = section.get("nouns") or {}
    if isinstance(listed, list):
        listed = {noun: [] for noun in listed}
    for canonical, synonyms in listed.items():
        nouns.setdefault(canonical.upper(), []).extend(_words(synonyms))
    for canonical, synonyms in (section.get("synonyms") or {}).items():
        nouns.setdefault(canonical.upper(), []).extend(_words(synonyms))

    adjectives = _words(section.get("adjectives") or [])
    for obj in data.get("objects", []):
        for word in _words([obj["name"]] + list(obj.get("synonyms") or [])):
            nouns.setdefault(word, [])
        adjectives.extend(_words(obj.get("adjectives") or []))

    return base.extended(
        nouns=nouns,
        adjectives=adjectives,
        verbs=section.get("verbs") or {},
        verbatim_verbs=section.get("verbatim") or (),
    )


def build_world(data: dict, vocabulary: Optional[VocabularyTable] = None) -> Tuple[WorldModel, VocabularyTable]:
    """Turn parsed world data into a (WorldModel, VocabularyTable) pair."""
    ok, error = validate_world_data(data)
    if not ok:
        raise ContentError(error)

    table = build_vocabulary(data, vocabulary)
    room_ids = {room["id"] for room in data["rooms"]}
    object_ids = {obj["id"] for obj in data["objects"]}

    world = WorldModel()
    for entry in data["rooms"]:
        exits = dict(
            _build_exit(direction, exit_data, room_ids, object_ids, table)
            for direction, exit_data in (entry.get("exits") or {}).items()
        )
        for object_id in list(entry.get("objects") or []) + list(entry.get("ambient") or []):
            if object_id not in object_ids:
                raise ContentError(f"Room {entry['id']} lists unknown object: {object_id}")
        world.add_room(Room(
            entry["id"], entry["name"], entry.get("description", ""),
            exits=exits,
            object_ids=entry.get("objects") or [],
            ambient_ids=entry.get("ambient") or [],
        ))

    # Two passes: every object must exist before anything is put inside it
    declared: Dict[str, str] = {}
    for entry in data["objects"]:
        location = entry.get("location") or NOWHERE
        if location not in (HELD, NOWHERE):
            declared[entry["id"]] = location
        try:
            obj = WorldObject.from_dict(dict(entry, location=NOWHERE))
        except ValueError as exc:
            raise ContentError(f"Object {entry['id']}: {exc}") from exc
        world.add_object(obj)
        if location == HELD:
            world.move_object(obj.id, HELD)

    for object_id, location in declared.items():
        if location not in room_ids and location not in object_ids:
            raise ContentError(f"Object {object_id} has unknown location: {location}")
        try:
            world.move_object(object_id, location)
        except ContainmentError as exc:
            raise ContentError(f"Object {object_id}: {exc.reason}") from exc

    for flag in data.get("flags") or []:
        world.set_flag(flag)

    world.enter_room(data["start_room"])
    parser_logger.info(
        f"Loaded world: {len(world.rooms)} rooms, {len(world.objects)} objects, "
        f"{len(table)} words"
    )
    return world, table


def load_world(path: Optional[str] = None, vocabulary: Optional[VocabularyTable] = None):
    """Read a world file from disk. Raises ContentError for unusable files."""
    path = path or DEFAULT_WORLD_FILE
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise ContentError(f"Cannot read world file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ContentError(f"World file {path} is not valid JSON: {exc}") from exc

    parser_logger.info(f"Reading world file {path}")
    return build_world(data, vocabulary)
