from dataclasses import dataclass, field
from typing import List, Optional

@dataclass
class CommandMetadata:
    """Metadata for a single canonical verb."""
    name: str
    aliases: List[str]
    description: str
    category: str
    usage: str
    help_text: str
    verbatim: bool = False  # trailing text is kept as one literal payload

COMMAND_REGISTRY: List[CommandMetadata] = [
    # MOVEMENT
    CommandMetadata(
        name="GO",
        aliases=["WALK", "RUN", "PROCEED", "STEP", "TRAVEL", "HEAD"],
        description="Move in a direction.",
        category="MOVEMENT",
        usage="GO <DIR> or <DIR>",
        help_text="Move through an exit (NORTH, SOUTH, EAST, WEST, UP, DOWN...). A bare direction works too."
    ),
    CommandMetadata(
        name="ENTER",
        aliases=["BOARD"],
        description="Enter something.",
        category="MOVEMENT",
        usage="ENTER <object>",
        help_text="Climb into or onto an object."
    ),
    CommandMetadata(
        name="CLIMB",
        aliases=["SCALE"],
        description="Climb something.",
        category="MOVEMENT",
        usage="CLIMB <object>",
        help_text="Climb up or down an object."
    ),

    # OBSERVATION
    CommandMetadata(
        name="LOOK",
        aliases=["L"],
        description="Look around.",
        category="OBSERVATION",
        usage="LOOK [AT <object>]",
        help_text="Describe the current room, or an object with LOOK AT."
    ),
    CommandMetadata(
        name="EXAMINE",
        aliases=["X", "INSPECT", "DESCRIBE", "STUDY"],
        description="Examine an object.",
        category="OBSERVATION",
        usage="EXAMINE <object>",
        help_text="Take a closer look at something you can see."
    ),
    CommandMetadata(
        name="READ",
        aliases=["SKIM"],
        description="Read something.",
        category="OBSERVATION",
        usage="READ <object>",
        help_text="Read a book, leaflet or inscription."
    ),
    CommandMetadata(
        name="SEARCH",
        aliases=["FIND", "SEEK"],
        description="Search an object.",
        category="OBSERVATION",
        usage="SEARCH <object>",
        help_text="Search something for hidden things."
    ),
    CommandMetadata(
        name="LISTEN",
        aliases=["HEAR"],
        description="Listen.",
        category="OBSERVATION",
        usage="LISTEN [TO <object>]",
        help_text="Listen to your surroundings."
    ),
    CommandMetadata(
        name="SMELL",
        aliases=["SNIFF"],
        description="Smell something.",
        category="OBSERVATION",
        usage="SMELL [object]",
        help_text="Smell your surroundings or an object."
    ),

    # INVENTORY
    CommandMetadata(
        name="INVENTORY",
        aliases=["I", "INV"],
        description="Check inventory.",
        category="INVENTORY",
        usage="INVENTORY",
        help_text="List items you are carrying."
    ),
    CommandMetadata(
        name="TAKE",
        aliases=["GET", "GRAB", "CARRY", "HOLD", "CATCH", "PICKUP"],
        description="Pick up an object.",
        category="INVENTORY",
        usage="TAKE <object> | TAKE ALL",
        help_text="Pick up something portable that you can reach."
    ),
    CommandMetadata(
        name="DROP",
        aliases=["DISCARD"],
        description="Drop an object.",
        category="INVENTORY",
        usage="DROP <object> | DROP ALL",
        help_text="Drop something you are carrying into the current room."
    ),
    CommandMetadata(
        name="PUT",
        aliases=["PLACE", "INSERT", "STUFF"],
        description="Put an object somewhere.",
        category="INVENTORY",
        usage="PUT <object> IN <container>",
        help_text="Put something you are carrying into an open container."
    ),
    CommandMetadata(
        name="GIVE",
        aliases=["OFFER", "FEED", "DONATE"],
        description="Give an object.",
        category="INVENTORY",
        usage="GIVE <object> TO <target>",
        help_text="Give an item to someone."
    ),
    CommandMetadata(
        name="THROW",
        aliases=["TOSS", "HURL", "CHUCK"],
        description="Throw an object.",
        category="INVENTORY",
        usage="THROW <object> [AT <target>]",
        help_text="Throw something you are carrying."
    ),

    # MANIPULATION
    CommandMetadata(
        name="OPEN",
        aliases=["UNCOVER"],
        description="Open a container or door.",
        category="MANIPULATION",
        usage="OPEN <object>",
        help_text="Open something that can be opened."
    ),
    CommandMetadata(
        name="CLOSE",
        aliases=["SHUT"],
        description="Close a container or door.",
        category="MANIPULATION",
        usage="CLOSE <object>",
        help_text="Close something that is open."
    ),
    CommandMetadata(
        name="UNLOCK",
        aliases=[],
        description="Unlock something.",
        category="MANIPULATION",
        usage="UNLOCK <object> WITH <key>",
        help_text="Unlock a door or container with a key."
    ),
    CommandMetadata(
        name="LOCK",
        aliases=[],
        description="Lock something.",
        category="MANIPULATION",
        usage="LOCK <object> WITH <key>",
        help_text="Lock a door or container with a key."
    ),
    CommandMetadata(
        name="TURN",
        aliases=["FLIP", "SET", "SWITCH"],
        description="Turn something.",
        category="MANIPULATION",
        usage="TURN <object> | TURN ON <object>",
        help_text="Turn a dial, or switch something on or off."
    ),
    CommandMetadata(
        name="PUSH",
        aliases=["PRESS", "SHOVE"],
        description="Push something.",
        category="MANIPULATION",
        usage="PUSH <object>",
        help_text="Push a button or a heavy object."
    ),
    CommandMetadata(
        name="PULL",
        aliases=["TUG", "YANK", "DRAG"],
        description="Pull something.",
        category="MANIPULATION",
        usage="PULL <object>",
        help_text="Pull a lever or a rope."
    ),
    CommandMetadata(
        name="MOVE",
        aliases=["ROLL", "SHIFT"],
        description="Move an object aside.",
        category="MANIPULATION",
        usage="MOVE <object>",
        help_text="Move a heavy object to see what is under it."
    ),
    CommandMetadata(
        name="LIGHT",
        aliases=["IGNITE"],
        description="Light something.",
        category="MANIPULATION",
        usage="LIGHT <object>",
        help_text="Light a lamp, candle or match."
    ),
    CommandMetadata(
        name="EXTINGUISH",
        aliases=["DOUSE", "QUENCH"],
        description="Put out a light.",
        category="MANIPULATION",
        usage="EXTINGUISH <object>",
        help_text="Turn off or blow out a light source."
    ),
    CommandMetadata(
        name="TIE",
        aliases=["FASTEN", "ATTACH"],
        description="Tie something.",
        category="MANIPULATION",
        usage="TIE <object> TO <object>",
        help_text="Tie a rope to something."
    ),
    CommandMetadata(
        name="UNTIE",
        aliases=["UNFASTEN", "DETACH"],
        description="Untie something.",
        category="MANIPULATION",
        usage="UNTIE <object>",
        help_text="Untie a rope."
    ),
    CommandMetadata(
        name="FILL",
        aliases=[],
        description="Fill a container.",
        category="MANIPULATION",
        usage="FILL <object> WITH <object>",
        help_text="Fill a bottle or bucket."
    ),
    CommandMetadata(
        name="POUR",
        aliases=["SPILL", "EMPTY"],
        description="Pour something out.",
        category="MANIPULATION",
        usage="POUR <object> [ON <object>]",
        help_text="Pour out the contents of a container."
    ),
    CommandMetadata(
        name="RUB",
        aliases=["TOUCH", "FEEL", "PAT"],
        description="Touch something.",
        category="MANIPULATION",
        usage="RUB <object>",
        help_text="Touch or rub an object."
    ),
    CommandMetadata(
        name="WAVE",
        aliases=["BRANDISH", "SWING"],
        description="Wave something.",
        category="MANIPULATION",
        usage="WAVE <object>",
        help_text="Wave an object around."
    ),
    CommandMetadata(
        name="DIG",
        aliases=[],
        description="Dig.",
        category="MANIPULATION",
        usage="DIG [IN <object>] [WITH <tool>]",
        help_text="Dig in sand or soil."
    ),
    CommandMetadata(
        name="WEAR",
        aliases=["DON"],
        description="Wear something.",
        category="MANIPULATION",
        usage="WEAR <object>",
        help_text="Put on a wearable item."
    ),

    # CONSUMPTION
    CommandMetadata(
        name="EAT",
        aliases=["CONSUME", "TASTE", "BITE"],
        description="Eat something.",
        category="CONSUMPTION",
        usage="EAT <object>",
        help_text="Eat some food."
    ),
    CommandMetadata(
        name="DRINK",
        aliases=["SIP", "SWALLOW"],
        description="Drink something.",
        category="CONSUMPTION",
        usage="DRINK <object>",
        help_text="Drink a liquid."
    ),

    # COMBAT
    CommandMetadata(
        name="ATTACK",
        aliases=["KILL", "FIGHT", "HIT", "HURT", "INJURE", "MURDER", "SLAY", "STAB", "STRIKE"],
        description="Attack a target.",
        category="COMBAT",
        usage="ATTACK <target> WITH <weapon>",
        help_text="Attack someone or something, preferably with a weapon."
    ),
    CommandMetadata(
        name="BREAK",
        aliases=["SMASH", "DESTROY", "DAMAGE", "SHATTER"],
        description="Break something.",
        category="COMBAT",
        usage="BREAK <object> [WITH <object>]",
        help_text="Attempt to break an object."
    ),
    CommandMetadata(
        name="CUT",
        aliases=["SLICE", "PIERCE", "CHOP"],
        description="Cut something.",
        category="COMBAT",
        usage="CUT <object> WITH <blade>",
        help_text="Cut something with a blade."
    ),
    CommandMetadata(
        name="BURN",
        aliases=["INCINERATE", "SCORCH"],
        description="Burn something.",
        category="COMBAT",
        usage="BURN <object> WITH <flame>",
        help_text="Set something on fire."
    ),

    # COMMUNICATION
    CommandMetadata(
        name="SAY",
        aliases=["UTTER"],
        description="Say something aloud.",
        category="COMMUNICATION",
        usage="SAY <anything>",
        help_text="Speak the rest of the line aloud, exactly as typed.",
        verbatim=True
    ),
    CommandMetadata(
        name="ECHO",
        aliases=[],
        description="Echo a phrase.",
        category="COMMUNICATION",
        usage="ECHO <anything>",
        help_text="Shout the rest of the line and listen for the echo.",
        verbatim=True
    ),
    CommandMetadata(
        name="WRITE",
        aliases=["SCRAWL", "INSCRIBE"],
        description="Write something down.",
        category="COMMUNICATION",
        usage="WRITE <anything>",
        help_text="Write the rest of the line, exactly as typed.",
        verbatim=True
    ),
    CommandMetadata(
        name="TELL",
        aliases=["ASK", "ANSWER", "REPLY"],
        description="Talk to someone.",
        category="COMMUNICATION",
        usage="TELL <target> ABOUT <object>",
        help_text="Talk to a character about something."
    ),
    CommandMetadata(
        name="YELL",
        aliases=["SCREAM", "SHOUT"],
        description="Yell.",
        category="COMMUNICATION",
        usage="YELL",
        help_text="Make a lot of noise."
    ),
    CommandMetadata(
        name="HELLO",
        aliases=["HI", "GREET"],
        description="Say hello.",
        category="COMMUNICATION",
        usage="HELLO [target]",
        help_text="Greet someone."
    ),

    # SYSTEM
    CommandMetadata(
        name="HELP",
        aliases=["HINT"],
        description="Show help.",
        category="SYSTEM",
        usage="HELP",
        help_text="Show the list of verbs."
    ),
    CommandMetadata(
        name="WAIT",
        aliases=["Z", "REST"],
        description="Wait one turn.",
        category="SYSTEM",
        usage="WAIT",
        help_text="Pass time without taking an action."
    ),
    CommandMetadata(
        name="AGAIN",
        aliases=["G", "REPEAT"],
        description="Repeat the last command.",
        category="SYSTEM",
        usage="AGAIN",
        help_text="Repeat your last successful command."
    ),
    CommandMetadata(
        name="OOPS",
        aliases=["O"],
        description="Correct a typo.",
        category="SYSTEM",
        usage="OOPS <word>",
        help_text="Replace the word the parser did not know in your last command."
    ),
    CommandMetadata(
        name="QUIT",
        aliases=["Q"],
        description="Quit.",
        category="SYSTEM",
        usage="QUIT",
        help_text="Leave the game."
    ),
]

# Verbs that take a direction as their object.
MOVEMENT_VERBS = {"GO"}

def get_command_by_name(name: str) -> Optional[CommandMetadata]:
    """Find a command by name or alias (case-insensitive)."""
    name = name.upper()
    for cmd in COMMAND_REGISTRY:
        if cmd.name == name or name in cmd.aliases:
            return cmd
    return None

def get_commands_by_category(category: str) -> List[CommandMetadata]:
    """Get all commands in a specific category."""
    category = category.upper()
    return [cmd for cmd in COMMAND_REGISTRY if cmd.category == category]

def get_all_categories() -> List[str]:
    """Get a list of all unique command categories."""
    categories = {cmd.category for cmd in COMMAND_REGISTRY}
    return sorted(list(categories))

def get_verbatim_verbs() -> List[str]:
    """Canonical verbs whose trailing text is not split into words."""
    return [cmd.name for cmd in COMMAND_REGISTRY if cmd.verbatim]
