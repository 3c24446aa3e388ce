"""Terminal loop for the Lantern parser."""

import os
import atexit
import argparse

# Arrow-key history: GNU readline, or pyreadline3 on Windows
try:
    import readline
except ImportError:
    try:
        import pyreadline3 as readline
    except ImportError:
        readline = None

from core.event_system import EventType, GameEvent
from core.logger import parser_logger
from systems.content_loader import ContentError
from ui.crt_effects import CRTOutput
from ui.message_reporter import MessageReporter
from ui.settings import settings
from engine import ParserSession

HISTORY_FILE = os.path.expanduser("~/.lantern_history")
MAX_HISTORY_LENGTH = 100


def _setup_readline(history_length=MAX_HISTORY_LENGTH):
    """Restore typed-line history from HISTORY_FILE and write it back at exit."""
    if readline is None:
        return

    readline.set_history_length(history_length)
    if os.path.exists(HISTORY_FILE):
        try:
            readline.read_history_file(HISTORY_FILE)
        except OSError as e:
            parser_logger.warning(f"Could not read {HISTORY_FILE}: {e}")

    atexit.register(_save_history)


def _save_history():
    try:
        readline.write_history_file(HISTORY_FILE)
    except OSError as e:
        parser_logger.warning(f"Could not write {HISTORY_FILE}: {e}")


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Lantern text adventure parser")
    parser.add_argument("--world", help="Path to a JSON world file")
    parser.add_argument("--show-parse", action="store_true", help="Echo each parsed command")
    parser.add_argument("--plain", action="store_true", help="Disable colors and scanlines")
    return parser.parse_args(argv)


def main(argv=None):
    """Read lines until QUIT or end of input; returns a process exit code."""
    args = _parse_args(argv)
    _setup_readline(settings.get("history_length", MAX_HISTORY_LENGTH))

    crt = CRTOutput(palette=settings.get("palette", "amber"))
    try:
        session = ParserSession.from_file(args.world or settings.get("world_file"))
    except ContentError as e:
        crt.error(str(e))
        return 1

    reporter = MessageReporter(crt, bus=session.bus, vocabulary=session.vocabulary)
    settings.apply_to_session(session, crt=crt, reporter=reporter)
    if args.show_parse:
        reporter.show_parse = True
    if args.plain:
        crt.enabled = False

    crt.header("LANTERN")
    crt.output("HINT: Type 'HELP' for a list of commands. Start by looking around.")
    session.submit("look")

    try:
        while not session.finished:
            try:
                user_input = input(crt.prompt()).strip()
            except EOFError:
                break
            if not user_input:
                continue
            session.submit(user_input)
    except KeyboardInterrupt:
        session.bus.emit(GameEvent(EventType.MESSAGE, {"text": "\nGoodbye."}))
    finally:
        reporter.cleanup()
    return 0


if __name__ == "__main__":
    main()
