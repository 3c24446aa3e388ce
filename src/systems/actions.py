from abc import ABC, abstractmethod
from typing import Dict, List, TYPE_CHECKING
from dataclasses import dataclass

from core.command_registry import get_all_categories, get_commands_by_category
from core.event_system import EventBus, EventType, GameEvent
from core.grammar import ParsedCommand
from entities.item import HELD, ObjectFlag
from entities.world_map import ContainmentError

if TYPE_CHECKING:
    from entities.world_map import WorldModel


@dataclass
class GameContext:
    world: 'WorldModel'
    bus: EventBus

    def emit(self, event_type: EventType, payload=None):
        self.bus.emit(GameEvent(event_type, payload or {}))


class Command(ABC):
    """Base class for all executable verbs."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def aliases(self) -> List[str]:
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @abstractmethod
    def execute(self, context: GameContext, command: ParsedCommand) -> None:
        pass


def _the(obj) -> str:
    return f"the {obj.display_name}"


def _a(obj) -> str:
    name = obj.display_name
    return f"an {name}" if name[:1].lower() in "aeiou" else f"a {name}"


def _listing(objects) -> str:
    return ", ".join(_a(obj) for obj in objects)


def _visible_contents(world, location_id):
    return [obj for obj in world.contents_of(location_id) if not obj.has_flag(ObjectFlag.INVISIBLE)]


class GoCommand(Command):
    name = "GO"
    aliases = []
    description = "Move in a direction."

    def execute(self, context: GameContext, command: ParsedCommand) -> None:
        world = context.world
        if not command.direction:
            context.emit(EventType.ERROR, {"text": "Which way do you want to go?"})
            return

        exit_ = world.find_exit(command.direction)
        if exit_ is None:
            context.emit(EventType.WARNING, {"text": "You can't go that way."})
            return
        if not exit_.is_passable(world):
            context.emit(EventType.WARNING, {"text": exit_.message or "Something blocks the way."})
            return

        previous = world.current_room_id
        room = world.enter_room(exit_.destination)
        context.emit(EventType.MOVEMENT, {
            "direction": command.direction,
            "from": previous,
            "to": room.id,
            "destination": room.name,
            "description": room.description,
        })


class TakeCommand(Command):
    name = "TAKE"
    aliases = []
    description = "Pick up an object."

    def execute(self, context: GameContext, command: ParsedCommand) -> None:
        world = context.world
        if not command.direct_objects:
            context.emit(EventType.ERROR, {"text": "What do you want to take?"})
            return

        source = command.indirect_object if command.preposition == "FROM" else None
        prefix = len(command.direct_objects) > 1
        for object_id in command.direct_objects:
            obj = world.get_object(object_id)
            label = f"{obj.display_name}: " if prefix else ""
            if obj.is_held():
                context.emit(EventType.MESSAGE, {"text": f"{label}You already have {_the(obj)}."})
            elif source and obj.location != source:
                context.emit(EventType.WARNING, {
                    "text": f"{label}{_the(obj).capitalize()} isn't in {_the(world.get_object(source))}."
                })
            elif not obj.is_portable():
                context.emit(EventType.WARNING, {"text": f"{label}You can't take {_the(obj)}."})
            else:
                world.move_object(object_id, HELD)
                context.emit(EventType.ITEM_PICKUP, {"item": obj.display_name, "id": obj.id})


class DropCommand(Command):
    name = "DROP"
    aliases = []
    description = "Drop an object you are carrying."

    def execute(self, context: GameContext, command: ParsedCommand) -> None:
        world = context.world
        if not command.direct_objects:
            context.emit(EventType.ERROR, {"text": "What do you want to drop?"})
            return

        carried = [world.get_object(oid) for oid in command.direct_objects]
        if command.is_all:
            carried = [obj for obj in carried if obj.is_held()]
            if not carried:
                context.emit(EventType.WARNING, {"text": "You aren't carrying anything."})
                return

        for obj in carried:
            if not obj.is_held():
                context.emit(EventType.WARNING, {"text": f"You aren't carrying {_the(obj)}."})
                continue
            world.move_object(obj.id, world.current_room_id)
            context.emit(EventType.ITEM_DROP, {"item": obj.display_name, "id": obj.id})


class PutCommand(Command):
    name = "PUT"
    aliases = []
    description = "Put an object into or onto another."

    def execute(self, context: GameContext, command: ParsedCommand) -> None:
        world = context.world
        if not command.direct_objects:
            context.emit(EventType.ERROR, {"text": "What do you want to put?"})
            return
        if not command.indirect_object:
            context.emit(EventType.ERROR, {"text": "Where do you want to put it?"})
            return

        target = world.get_object(command.indirect_object)
        if target.is_container() and not target.is_open():
            context.emit(EventType.WARNING, {"text": f"{_the(target).capitalize()} is closed."})
            return

        for object_id in command.direct_objects:
            obj = world.get_object(object_id)
            if object_id == target.id:
                continue
            if not obj.is_portable():
                context.emit(EventType.WARNING, {"text": f"You can't move {_the(obj)}."})
                continue
            try:
                world.move_object(object_id, target.id)
            except ContainmentError as e:
                context.emit(EventType.WARNING, {
                    "text": f"You can't put {_the(obj)} there: {e.reason}."
                })
                continue
            context.emit(EventType.OBJECT_MOVED, {
                "item": obj.display_name,
                "id": obj.id,
                "preposition": (command.preposition or "IN").lower(),
                "target": target.display_name,
            })


class OpenCommand(Command):
    name = "OPEN"
    aliases = []
    description = "Open a container or door."

    def execute(self, context: GameContext, command: ParsedCommand) -> None:
        world = context.world
        if not command.direct_object:
            context.emit(EventType.ERROR, {"text": "What do you want to open?"})
            return

        obj = world.get_object(command.direct_object)
        if not obj.is_openable():
            context.emit(EventType.WARNING, {"text": f"You can't open {_the(obj)}."})
            return
        if obj.is_open():
            context.emit(EventType.MESSAGE, {"text": f"{_the(obj).capitalize()} is already open."})
            return

        world.set_object_flag(obj.id, ObjectFlag.OPEN, True)
        contents = _visible_contents(world, obj.id) if obj.is_container() else []
        text = f"Opening {_the(obj)} reveals {_listing(contents)}." if contents else "Opened."
        context.emit(EventType.CONTAINER_CHANGED, {"id": obj.id, "open": True, "text": text})


class CloseCommand(Command):
    name = "CLOSE"
    aliases = []
    description = "Close a container or door."

    def execute(self, context: GameContext, command: ParsedCommand) -> None:
        world = context.world
        if not command.direct_object:
            context.emit(EventType.ERROR, {"text": "What do you want to close?"})
            return

        obj = world.get_object(command.direct_object)
        if not obj.is_openable():
            context.emit(EventType.WARNING, {"text": f"You can't close {_the(obj)}."})
            return
        if not obj.is_open():
            context.emit(EventType.MESSAGE, {"text": f"{_the(obj).capitalize()} is already closed."})
            return

        world.set_object_flag(obj.id, ObjectFlag.OPEN, False)
        context.emit(EventType.CONTAINER_CHANGED, {"id": obj.id, "open": False, "text": "Closed."})


class ExamineCommand(Command):
    name = "EXAMINE"
    aliases = []
    description = "Examine an object closely."

    def execute(self, context: GameContext, command: ParsedCommand) -> None:
        world = context.world
        if not command.direct_objects:
            context.emit(EventType.ERROR, {"text": "What do you want to examine?"})
            return

        for object_id in command.direct_objects:
            obj = world.get_object(object_id)
            lines = [obj.description or f"You see nothing special about {_the(obj)}."]
            if obj.is_container():
                if not obj.is_open():
                    lines.append(f"{_the(obj).capitalize()} is closed.")
                else:
                    contents = _visible_contents(world, obj.id)
                    if contents:
                        lines.append(f"{_the(obj).capitalize()} contains {_listing(contents)}.")
            context.emit(EventType.MESSAGE, {"text": "\n".join(lines)})


class LookCommand(Command):
    name = "LOOK"
    aliases = []
    description = "Describe the surroundings, or look at something."

    def execute(self, context: GameContext, command: ParsedCommand) -> None:
        # LOOK AT LAMP / LOOK IN BOX arrive with the object as the indirect
        target = command.direct_objects or ((command.indirect_object,) if command.indirect_object else ())
        if target:
            ExamineCommand().execute(context, ParsedCommand(
                verb="EXAMINE", direct_objects=tuple(target), raw_input=command.raw_input
            ))
            return

        world = context.world
        room = world.current_room
        if room is None:
            context.emit(EventType.ERROR, {"text": "You are nowhere."})
            return

        lines = [room.name.upper(), room.description]
        visible = [obj for obj in _visible_contents(world, room.id) if not obj.is_scenery()]
        if visible:
            lines.append(f"You can see {_listing(visible)} here.")
        for obj in _visible_contents(world, room.id):
            if obj.is_container() and obj.is_open():
                contents = _visible_contents(world, obj.id)
                if contents:
                    lines.append(f"{_the(obj).capitalize()} contains {_listing(contents)}.")
        exits = sorted(room.exits)
        if exits:
            lines.append(f"Exits: {', '.join(exits)}")
        context.emit(EventType.MESSAGE, {"text": "\n".join(lines)})


class InventoryCommand(Command):
    name = "INVENTORY"
    aliases = []
    description = "List what you are carrying."

    def execute(self, context: GameContext, command: ParsedCommand) -> None:
        held = context.world.inventory()
        context.emit(EventType.MESSAGE, {"text": "--- INVENTORY ---"})
        if not held:
            context.emit(EventType.MESSAGE, {"text": "(Empty)"})
        else:
            context.emit(EventType.MESSAGE, {"text": "\n".join(f"- {obj.display_name}" for obj in held)})


class HelpCommand(Command):
    name = "HELP"
    aliases = []
    description = "List the verbs the parser understands."

    def execute(self, context: GameContext, command: ParsedCommand) -> None:
        lines = ["=== COMMANDS ==="]
        for category in get_all_categories():
            lines.append(f"[{category}]")
            for meta in get_commands_by_category(category):
                lines.append(f"  {meta.usage:<28} {meta.description}")
        context.emit(EventType.MESSAGE, {"text": "\n".join(lines)})


class SayCommand(Command):
    name = "SAY"
    aliases = []
    description = "Say something out loud."

    def execute(self, context: GameContext, command: ParsedCommand) -> None:
        if not command.literal:
            context.emit(EventType.ERROR, {"text": "What do you want to say?"})
            return
        context.emit(EventType.MESSAGE, {"text": f'You say, "{command.literal}"'})


class WaitCommand(Command):
    name = "WAIT"
    aliases = []
    description = "Wait one turn."

    def execute(self, context: GameContext, command: ParsedCommand) -> None:
        context.emit(EventType.MESSAGE, {"text": "Time passes."})


class CommandDispatcher:
    """Routes parsed commands to executable verbs by canonical verb."""

    def __init__(self):
        self.commands: Dict[str, Command] = {}
        self._register_defaults()

    def _register_defaults(self):
        """Register all available commands."""
        self.register(GoCommand())
        self.register(TakeCommand())
        self.register(DropCommand())
        self.register(PutCommand())
        self.register(OpenCommand())
        self.register(CloseCommand())
        self.register(LookCommand())
        self.register(ExamineCommand())
        self.register(InventoryCommand())
        self.register(HelpCommand())
        self.register(SayCommand())
        self.register(WaitCommand())

    def register(self, command: Command):
        """Register a command and its aliases."""
        self.commands[command.name] = command
        for alias in command.aliases:
            self.commands[alias] = command

    def dispatch(self, context: GameContext, parsed: ParsedCommand) -> None:
        """Run a parsed command. Verbs with no handler do nothing visible."""
        handler = self.commands.get(parsed.verb)
        if handler is None:
            context.emit(EventType.MESSAGE, {"text": "Nothing happens."})
            return
        handler.execute(context, parsed)
