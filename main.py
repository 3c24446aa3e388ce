#!/usr/bin/env python3
"""
Lantern: text adventure command parser
Terminal launcher. Run from the project root: python main.py [--world PATH] [--plain]
"""

import os
import sys

# Modules under src/ import each other as top-level packages (core, systems, ui)
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

if __name__ == "__main__":
    from engine import main
    sys.exit(main())
