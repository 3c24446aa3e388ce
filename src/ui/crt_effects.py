"""
CRT Styling System
Amber-terminal output for the parser: palettes, scanlines, text crawl.
Capture mode buffers plain text instead of printing (used by the web server).
"""

import re
import sys
import time


class ANSI:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[38;5;196m"


ANSI_PATTERN = re.compile(r'\033\[[0-9;]*m')


def _color(code):
    return f"\033[38;5;{code}m"


# name -> (256-color code, description)
PALETTES = {
    "amber": (_color(214), "Classic amber CRT terminal (default)"),
    "green": (_color(46), "Green phosphor terminal"),
    "white": (_color(255), "Plain white terminal"),
    "colorblind": (_color(51), "High contrast cyan (colorblind-friendly)"),
    "high-contrast": (_color(231), "Maximum contrast white on black"),
}
FALLBACK_PALETTE = "white"


def strip_ansi(text):
    return ANSI_PATTERN.sub('', text)


class CRTOutput:
    """
    Every line the player sees goes through here.

    ``enabled`` toggles colors and scanlines; with capture mode on, nothing
    is printed and plain lines are collected in ``buffer`` instead.
    """

    def __init__(self, palette="amber", crawl_speed=0.0):
        self.crawl_speed = crawl_speed  # seconds per character, 0 disables crawl
        self.enabled = True
        self.capture_mode = False
        self.buffer = []
        self.set_palette(palette)

    def set_palette(self, palette_name):
        """Switch palette; unknown names keep the name but render white."""
        self.palette = palette_name
        self.color = PALETTES.get(palette_name, PALETTES[FALLBACK_PALETTE])[0]

    @staticmethod
    def get_available_palettes():
        return {name: description for name, (_, description) in PALETTES.items()}

    # --- capture (web server) ------------------------------------------

    def start_capture(self):
        self.capture_mode = True
        self.buffer = []

    def stop_capture(self):
        """Leave capture mode and hand back what was collected."""
        captured, self.buffer = self.buffer, []
        self.capture_mode = False
        return captured

    # --- output ---------------------------------------------------------

    def _emit(self, plain, styled):
        if self.capture_mode:
            self.buffer.append(strip_ansi(plain))
        elif not self.enabled:
            print(plain)
        else:
            print(styled)

    def output(self, text, crawl=False):
        if self.capture_mode or not self.enabled:
            self._emit(text, text)
            return

        if crawl and self.crawl_speed:
            self._crawl(f"{self.color}{text}{ANSI.RESET}")
            return

        # Scanlines: every second line is dimmed
        for index, line in enumerate(text.split('\n')):
            dim = ANSI.DIM if index % 2 else ""
            print(f"{dim}{self.color}{line}{ANSI.RESET}")

    def _crawl(self, text):
        for char in text:
            sys.stdout.write(char)
            sys.stdout.flush()
            if char not in '\r\n':
                time.sleep(self.crawl_speed)
        sys.stdout.write('\n')

    def warning(self, text):
        if self.capture_mode:
            self.buffer.append(f"[WARNING] {text}")
            return
        self._emit(f"[!] {text}", f"{ANSI.BOLD}{self.color}[!] {text}{ANSI.RESET}")

    def error(self, text):
        self._emit(f"[ERROR] {text}", f"{ANSI.RED}[ERROR] {text}{ANSI.RESET}")

    def header(self, text):
        """Boxed title line."""
        border = "+" + "=" * (len(text) + 4) + "+"
        if self.capture_mode or not self.enabled:
            self.output(f"{border}\n|  {text}  |\n{border}")
            return
        for line in (border, f"|  {ANSI.BOLD}{text}{ANSI.RESET}{self.color}  |", border):
            print(f"{self.color}{line}{ANSI.RESET}")

    def prompt(self, text=""):
        if not self.enabled:
            return f"{text}> "
        return f"{self.color}{ANSI.BOLD}{text}>{ANSI.RESET} "
