"""
User interface layer for kappagotchi.
Provides unified access to:
- View: rich rendering of the fishing, catch and room screens.
- Voice: event and error lines.
- faces: ASCII faces per display state.
"""

from . import faces
from .view import View, render
from .voice import Voice

__all__ = ["View", "Voice", "faces", "render"]
