import os
import json
import logging
import stat
import tempfile
from typing import Any, Dict

file_io_logger = logging.getLogger("kappagotchi.storage.file_io")

NEW_FILE_MODE = 0o600


def atomically_save_data(filepath: str, data: Dict[str, Any]) -> bool:
    """
    Atomically saves JSON data to a file, keeping the previous file's mode.

    Steps:
    - Write to a temp file in the same directory.
    - Replace target atomically with os.replace().
    - Reapply prior file's permissions if it existed, else mode 600.
    """
    file_io_logger.debug(f"Attempting atomic save to: {filepath}")

    dir_path = os.path.dirname(filepath)
    if dir_path and not os.path.exists(dir_path):
        try:
            os.makedirs(dir_path, exist_ok=True)
        except OSError as e:
            file_io_logger.error(f"Could not create directory {dir_path}: {e}")
            return False

    existing_mode = NEW_FILE_MODE
    if os.path.exists(filepath):
        try:
            existing_mode = stat.S_IMODE(os.stat(filepath).st_mode)
        except OSError as e:
            file_io_logger.debug(f"Could not stat existing file {filepath}: {e}")

    temp_file_name = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", delete=False, dir=dir_path or None, encoding="utf-8", suffix=".tmp"
        ) as tmp_fp:
            temp_file_name = tmp_fp.name
            json.dump(data, tmp_fp, indent=2)

        os.replace(temp_file_name, filepath)

        try:
            os.chmod(filepath, existing_mode)
        except OSError as e:
            file_io_logger.debug(f"chmod({filepath}, {oct(existing_mode)}) failed: {e}")

        file_io_logger.debug(f"Saved data to {filepath} atomically.")
        return True

    except (OSError, TypeError, ValueError) as e:
        file_io_logger.error(f"Error during atomic save to {filepath}: {e}", exc_info=True)
        if temp_file_name and os.path.exists(temp_file_name):
            os.remove(temp_file_name)
        return False


def load_data(filepath: str, default: Any = None) -> Any:
    """
    Loads data from JSON, handling permission and decoding errors safely.
    """
    if not os.path.exists(filepath):
        file_io_logger.debug(f"File not found: {filepath}. Returning default value.")
        return default

    file_io_logger.debug(f"Loading data from: {filepath}")
    try:
        with open(filepath, "r", encoding="utf-8") as fp:
            return json.load(fp)
    except PermissionError as e:
        file_io_logger.error(f"Permission denied when reading {filepath}: {e}")
        return default
    except json.JSONDecodeError:
        file_io_logger.error(f"File {filepath} is corrupted (Invalid JSON).")
        return default
    except (OSError, UnicodeDecodeError) as e:
        file_io_logger.error(f"Error reading file {filepath}: {e}")
        return default
