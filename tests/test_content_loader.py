"""World file loading and validation."""

import json

import pytest

from core.grammar import WordCategory
from entities import HELD
from systems.content_loader import (
    ContentError, DEFAULT_WORLD_FILE, build_vocabulary, build_world, load_world, validate_world_data,
)


class TestValidation:

    def test_sample_world_is_valid(self, world_data):
        assert validate_world_data(world_data) == (True, None)

    def test_not_a_dict(self):
        ok, error = validate_world_data([])
        assert not ok
        assert "dictionary" in error

    def test_missing_fields(self, world_data):
        del world_data["start_room"]

        ok, error = validate_world_data(world_data)

        assert not ok
        assert "start_room" in error

    def test_custom_required_fields(self, world_data):
        ok, error = validate_world_data(world_data, required_fields=["start_room", "rooms", "objects", "title"])

        assert not ok
        assert "title" in error

    def test_entry_without_name(self, world_data):
        world_data["objects"].append({"id": "nameless"})

        ok, error = validate_world_data(world_data)

        assert not ok
        assert "name" in error

    def test_duplicate_object_id(self, world_data):
        world_data["objects"].append({"id": "knife", "name": "knife"})

        ok, error = validate_world_data(world_data)

        assert not ok
        assert error == "Duplicate object id: knife"

    def test_room_and_object_share_id(self, world_data):
        world_data["objects"].append({"id": "kitchen", "name": "kitchen sink"})

        ok, error = validate_world_data(world_data)

        assert not ok
        assert "kitchen" in error

    def test_unknown_start_room(self, world_data):
        world_data["start_room"] = "cellar"

        assert validate_world_data(world_data) == (False, "Unknown start room: cellar")


class TestBuildWorld:

    def test_invalid_data_raises(self, world_data):
        world_data["rooms"] = "not a list"

        with pytest.raises(ContentError):
            build_world(world_data)

    def test_exit_to_unknown_room(self, world_data):
        world_data["rooms"][1]["exits"]["south"] = "cellar"

        with pytest.raises(ContentError, match="cellar"):
            build_world(world_data)

    def test_exit_requiring_unknown_object(self, world_data):
        world_data["rooms"][1]["exits"]["south"] = {"to": "attic", "requires_open": "hatch"}

        with pytest.raises(ContentError, match="hatch"):
            build_world(world_data)

    def test_room_lists_unknown_object(self, world_data):
        world_data["rooms"][0]["objects"].append("sword")

        with pytest.raises(ContentError, match="sword"):
            build_world(world_data)

    def test_unknown_location(self, world_data):
        world_data["objects"].append({"id": "sword", "name": "sword", "location": "armoury"})

        with pytest.raises(ContentError, match="armoury"):
            build_world(world_data)

    def test_location_must_be_container(self, world_data):
        world_data["objects"].append({"id": "sword", "name": "sword", "location": "knife"})

        with pytest.raises(ContentError, match="not a container"):
            build_world(world_data)

    def test_unknown_flag(self, world_data):
        world_data["objects"][0]["flags"].append("sparkly")

        with pytest.raises(ContentError, match="sparkly"):
            build_world(world_data)

    def test_containers_filled_regardless_of_order(self, world_data):
        # Contents now come before their containers
        world_data["objects"].reverse()

        world, _ = build_world(world_data)

        assert world.location_of("coin") == "small_box"
        assert world.location_of("pebble") == "large_box"

    def test_held_objects_and_flags(self, world_data):
        world_data["objects"].append({"id": "torch", "name": "torch", "location": "held"})
        world_data["flags"] = ["ladder_down"]

        world, _ = build_world(world_data)

        assert world.location_of("torch") == HELD
        assert world.has_flag("ladder_down")
        assert world.exit_destination("north", room_id="attic") == "kitchen"

    def test_exit_directions_are_canonical(self, world_data):
        world_data["rooms"][1]["exits"] = {"w": "living_room", "upstairs": "attic"}

        world, _ = build_world(world_data)

        assert set(world.get_room("kitchen").exits) == {"WEST", "UP"}

    def test_start_room_entered(self, world):
        assert world.current_room_id == "living_room"
        assert world.current_room.visited


class TestVocabulary:

    def test_object_words_become_nouns(self, vocabulary):
        for word in ("lamp", "lantern", "trophy", "case", "trap", "door", "carpet"):
            assert vocabulary.classify(word) is WordCategory.NOUN, word

    def test_adjectives(self, vocabulary):
        for word in ("brass", "broken", "small", "large", "wooden"):
            assert vocabulary.classify(word) is WordCategory.ADJECTIVE, word

    def test_default_words_still_known(self, vocabulary):
        assert vocabulary.classify("take") is WordCategory.VERB
        assert vocabulary.classify("north") is WordCategory.DIRECTION

    def test_vocabulary_section(self, world_data):
        world_data["vocabulary"] = {
            "nouns": ["treasure"],
            "synonyms": {"lamp": ["light source"]},
            "adjectives": ["shiny"],
            "verbs": {"XYZZY": ["PLUGH"]},
            "verbatim": ["XYZZY"],
        }

        table = build_vocabulary(world_data)

        assert table.classify("treasure") is WordCategory.NOUN
        assert table.expand("source") == "LAMP"
        # LIGHT is already a verb
        assert table.classify("light") is WordCategory.VERB
        assert table.classify("shiny") is WordCategory.ADJECTIVE
        assert table.expand("plugh") == "XYZZY"
        assert table.is_verbatim_verb("plugh")


class TestLoadWorld:

    def test_bundled_world(self):
        world, vocabulary = load_world()

        assert world.current_room_id == "west_of_house"
        assert "leaflet" in world.objects
        assert world.location_of("leaflet") == "mailbox"
        assert vocabulary.expand("plugh") == "XYZZY"

    def test_default_path(self):
        assert DEFAULT_WORLD_FILE.endswith("world.json")

    def test_from_file(self, tmp_path, world_data):
        path = tmp_path / "house.json"
        path.write_text(json.dumps(world_data), encoding="utf-8")

        world, _ = load_world(str(path))

        assert set(world.rooms) == {"living_room", "kitchen", "attic"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ContentError, match="Cannot read"):
            load_world(str(tmp_path / "missing.json"))

    def test_bad_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{ not json", encoding="utf-8")

        with pytest.raises(ContentError, match="not valid JSON"):
            load_world(str(path))
