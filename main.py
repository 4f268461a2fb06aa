#!/usr/bin/env python3
"""Rawedit - a small text editor for raw ANSI terminals.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Ctrl-P/N/B/F: Move cursor
    Home/End, Ctrl-A/E: Beginning/end of line
    PageUp/PageDown: Scroll a screenful
    Ctrl-S: Save file
    Ctrl-Q: Quit (press twice if modified)
    Backspace, Ctrl-H: Delete character before cursor
    Delete, Ctrl-D: Delete character under cursor
    Enter: Split line
"""

from rawedit.__main__ import main


if __name__ == "__main__":
    main()
