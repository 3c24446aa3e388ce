"""Pytest configuration for the Lantern parser tests."""

import copy
import sys
import os

import pytest

# Add src directory to path for imports
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, PROJECT_ROOT)
sys.path.insert(0, os.path.join(PROJECT_ROOT, "src"))

from core.event_system import event_bus, EventType
from core.logger import reconfigure_parser_logger
from engine import ParserSession
from systems.content_loader import build_world
from systems.pronouns import PronounContext
from systems.resolver import Resolver
from ui.command_parser import CommandTokenizer


# A small house: two lamps and two boxes share nouns so ambiguity can be exercised.
SAMPLE_WORLD = {
    "start_room": "living_room",
    "rooms": [
        {
            "id": "living_room",
            "name": "Living Room",
            "description": "A cosy living room.",
            "exits": {
                "east": "kitchen",
                "up": {"to": "attic", "requires_open": "trapdoor", "message": "The trapdoor is closed."},
            },
            "objects": ["brass_lamp", "broken_lamp", "small_box", "large_box", "rug"],
            "ambient": ["trapdoor"],
        },
        {
            "id": "kitchen",
            "name": "Kitchen",
            "description": "A kitchen.",
            "exits": {"west": "living_room"},
            "objects": ["knife", "table", "trophy_case"],
        },
        {
            "id": "attic",
            "name": "Attic",
            "description": "A dusty attic.",
            "exits": {
                "down": "living_room",
                "north": {"to": "kitchen", "requires_flag": "ladder_down", "message": "There is no way down."},
            },
            "ambient": ["trapdoor"],
        },
    ],
    "objects": [
        {"id": "brass_lamp", "name": "lamp", "synonyms": ["lantern"], "adjectives": ["brass"],
         "flags": ["portable"], "description": "A brass lamp."},
        {"id": "broken_lamp", "name": "lamp", "synonyms": ["lantern"], "adjectives": ["broken"],
         "flags": ["portable"], "description": "A broken lamp."},
        {"id": "small_box", "name": "box", "adjectives": ["small"],
         "flags": ["portable", "container"], "description": "A small box."},
        {"id": "coin", "name": "coin", "adjectives": ["gold"], "location": "small_box",
         "flags": ["portable"], "description": "A gold coin."},
        {"id": "large_box", "name": "box", "adjectives": ["large"],
         "flags": ["container", "open"], "description": "A large box."},
        {"id": "pebble", "name": "pebble", "adjectives": ["grey"], "location": "large_box",
         "flags": ["portable"], "description": "A grey pebble."},
        {"id": "rug", "name": "rug", "synonyms": ["carpet"], "flags": ["scenery"]},
        {"id": "trapdoor", "name": "trapdoor", "synonyms": ["trap door"], "adjectives": ["wooden"],
         "flags": ["scenery", "openable"]},
        {"id": "knife", "name": "knife", "flags": ["portable"]},
        {"id": "table", "name": "table", "flags": ["scenery", "container", "open"]},
        {"id": "trophy_case", "name": "trophy case", "synonyms": ["case"], "flags": ["container", "open"]},
        {"id": "sky", "name": "sky", "flags": ["global", "scenery"]},
        {"id": "ghost", "name": "ghost", "flags": ["global", "invisible"]},
    ],
}


@pytest.fixture(autouse=True)
def clear_event_bus():
    """Ensure the global event bus has no subscribers between tests."""
    event_bus.clear()
    yield
    event_bus.clear()


@pytest.fixture(autouse=True)
def parser_log(tmp_path):
    """Keep parser traces out of the working directory."""
    reconfigure_parser_logger(log_file=str(tmp_path / "parser_trace.log"))
    yield tmp_path / "parser_trace.log"


@pytest.fixture
def world_data():
    return copy.deepcopy(SAMPLE_WORLD)


@pytest.fixture
def world_and_vocabulary(world_data):
    return build_world(world_data)


@pytest.fixture
def world(world_and_vocabulary):
    return world_and_vocabulary[0]


@pytest.fixture
def vocabulary(world_and_vocabulary):
    return world_and_vocabulary[1]


@pytest.fixture
def session(world, vocabulary):
    return ParserSession(world, vocabulary, session_id="test")


@pytest.fixture
def events(session):
    """Every event the session's bus emits, in order."""
    captured = []
    for event_type in EventType:
        session.bus.subscribe(event_type, captured.append)
    return captured


@pytest.fixture
def pronouns():
    return PronounContext()


@pytest.fixture
def parse(world, vocabulary):
    """Resolve one line against the fixture world.

    Pass a PronounContext to share bindings between calls; by default each
    call gets a fresh one.
    """
    resolver = Resolver(vocabulary)
    tokenizer = CommandTokenizer(vocabulary)

    def _parse(line, pronouns=None):
        tokenized = tokenizer.tokenize(line)
        return resolver.resolve(
            vocabulary.classify_words(tokenized.words),
            world.reachable_objects(),
            pronouns if pronouns is not None else PronounContext(),
            literal=tokenized.literal,
        )

    return _parse
