"""Rawedit - a small text editor for raw ANSI terminals."""

import logging

__version__ = "0.1.0"

from .model import Row, TextBuffer, FilePath, StatusMessage
from .keyboard import InputDecoder, KeyEvent, KeyType
from .view import ViewportCursor
from .renderer import Renderer

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Row',
    'TextBuffer',
    'FilePath',
    'StatusMessage',
    'InputDecoder',
    'KeyEvent',
    'KeyType',
    'ViewportCursor',
    'Renderer',
]
