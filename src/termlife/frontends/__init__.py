"""Frontend interfaces for the Game of Life engine."""

from .terminal import TerminalSession, KeyReader, render_frame
from .cli import TerminalGameOfLife

__all__ = ["TerminalSession", "KeyReader", "render_frame", "TerminalGameOfLife"]
