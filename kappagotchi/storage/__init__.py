"""
Persistence for kappagotchi: atomic JSON files and the saved game.
"""

from .file_io import atomically_save_data, load_data
from .snapshot import SnapshotStore, decode_snapshot

__all__ = ["atomically_save_data", "load_data", "SnapshotStore", "decode_snapshot"]
