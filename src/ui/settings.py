"""
Settings Manager
Parser and terminal preferences: world file, palette, correction hints,
parse tracing and logging. Settings persist to a JSON file in the user's
home directory.
"""

import os
import json

from core.logger import parser_logger, reconfigure_parser_logger

SETTINGS_FILE = os.path.expanduser("~/.lantern_settings.json")

DEFAULT_SETTINGS = {
    "world_file": None,            # None means the bundled sample world
    "palette": "amber",
    "effects_enabled": True,       # CRT colors and scanlines
    "suggest_corrections": True,   # "Did you mean ...?" after unknown words
    "show_parse": False,           # echo each ParsedCommand (debugging aid)
    "log_file": "parser_trace.log",
    "log_level": "INFO",
    "history_length": 100,         # readline history entries kept
}


class SettingsManager:
    """JSON-backed preferences; keys missing from the file fall back to DEFAULT_SETTINGS."""

    def __init__(self, settings_file=None):
        self.settings_file = settings_file or SETTINGS_FILE
        self.settings = dict(DEFAULT_SETTINGS)
        self.load()

    def load(self):
        if not os.path.exists(self.settings_file):
            return
        try:
            with open(self.settings_file, 'r') as f:
                saved = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            parser_logger.warning(f"Ignoring unreadable settings file {self.settings_file}: {e}")
            return
        # Saved values override defaults; keys added since the file was written keep their default
        if isinstance(saved, dict):
            self.settings.update(saved)

    def save(self):
        try:
            with open(self.settings_file, 'w') as f:
                json.dump(self.settings, f, indent=2)
        except OSError as e:
            parser_logger.warning(f"Could not save settings to {self.settings_file}: {e}")

    def get(self, key, default=None):
        return self.settings.get(key, default)

    def set(self, key, value):
        """Change one value and persist immediately."""
        self.settings[key] = value
        self.save()

    def reset(self):
        self.settings = dict(DEFAULT_SETTINGS)
        self.save()

    def apply_to_session(self, session, crt=None, reporter=None):
        """Apply current settings to a session and its renderer."""
        if crt is not None:
            crt.set_palette(self.settings.get("palette", "amber"))
            crt.enabled = self.settings.get("effects_enabled", True)

        if reporter is not None:
            reporter.suggest_corrections = self.settings.get("suggest_corrections", True)
            reporter.show_parse = self.settings.get("show_parse", False)

        history_length = self.settings.get("history_length", 100)
        if session.history.maxlen != history_length:
            session.history = type(session.history)(session.history, maxlen=history_length)

        reconfigure_parser_logger(
            log_file=self.settings.get("log_file"),
            level=self.settings.get("log_level"),
        )


settings = SettingsManager()
