"""
Voice submodule for the kappagotchi UI.
Turns engine events and errors into lines of text for the player.
"""

from .voice import Voice

__all__ = ["Voice"]
