"""World object entity for the adventure world."""

from enum import Enum


# Pseudo-locations that are neither rooms nor objects
HELD = "held"
NOWHERE = "nowhere"


class ObjectFlag(Enum):
    PORTABLE = "portable"
    CONTAINER = "container"
    OPEN = "open"
    SCENERY = "scenery"
    GLOBAL = "global"        # nameable everywhere while it has no location
    INVISIBLE = "invisible"  # never reachable
    OPENABLE = "openable"    # opens and closes without holding anything (doors)

    @classmethod
    def parse(cls, value):
        """Accept an ObjectFlag or its string value (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown object flag: {value!r}")


class WorldObject:
    """Represents a nameable thing in the world.

    An object has exactly one location at a time: a room id, the id of the
    container it sits in, HELD (the player's inventory) or NOWHERE. The
    location is changed only through ``WorldModel.move_object`` so the
    containment tree stays acyclic.
    """

    def __init__(self, id, name, synonyms=None, adjectives=None, location=NOWHERE,
                 flags=None, description=""):
        if not id:
            raise ValueError("World objects need an id.")
        if not name:
            raise ValueError(f"World object {id!r} needs a name.")
        self.id = id
        self.name = name
        self.synonyms = {s.upper() for s in (synonyms or [])}
        # Unordered input is sorted; the first adjective names the object to the player
        if isinstance(adjectives, (set, frozenset)):
            adjectives = sorted(adjectives)
        self.adjective_order = tuple(dict.fromkeys(a.upper() for a in (adjectives or [])))
        self.adjectives = set(self.adjective_order)
        self.location = location or NOWHERE
        self.flags = {ObjectFlag.parse(f) for f in (flags or [])}
        self.description = description

    def has_flag(self, flag):
        return ObjectFlag.parse(flag) in self.flags

    def names(self):
        """Display name plus synonyms, upper-cased."""
        return {self.name.upper()} | self.synonyms

    @property
    def display_name(self):
        """Name as shown to the player, e.g. "brass lamp"."""
        if self.adjective_order:
            return f"{self.adjective_order[0].lower()} {self.name}"
        return self.name

    def is_container(self):
        return ObjectFlag.CONTAINER in self.flags

    def is_open(self):
        return ObjectFlag.OPEN in self.flags

    def is_openable(self):
        return ObjectFlag.OPENABLE in self.flags or self.is_container()

    def is_portable(self):
        return ObjectFlag.PORTABLE in self.flags

    def is_scenery(self):
        return ObjectFlag.SCENERY in self.flags

    def is_held(self):
        return self.location == HELD

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"WorldObject({self.id!r}, {self.name!r}, location={self.location!r})"

    def to_dict(self):
        """Serialize object to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "synonyms": sorted(self.synonyms),
            "adjectives": [a.lower() for a in self.adjective_order],
            "location": self.location,
            "flags": sorted(f.value for f in self.flags),
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data):
        """Deserialize object from dictionary."""
        if not isinstance(data, dict):
            raise ValueError("Object data must be a dictionary.")

        return cls(
            id=data.get("id"),
            name=data.get("name"),
            synonyms=data.get("synonyms", []),
            adjectives=data.get("adjectives", []),
            location=data.get("location") or NOWHERE,
            flags=data.get("flags", []),
            description=data.get("description", ""),
        )
