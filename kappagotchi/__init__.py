# kappagotchi/__init__.py
"""
kappagotchi - a kappa life simulation for the terminal.

Top-level package metadata and lazy imports for runtime subsystems.
- Provides the CLI entrypoint (via `main()`).
- Defers heavy imports (Manager, View, etc.) until accessed to avoid circular deps.
"""

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "main",
    "Manager",
    "View",
    "Voice",
    "SnapshotStore",
    "RuleTable",
]

from importlib import import_module


def __getattr__(name: str):
    """Dynamically expose runtime components only when accessed."""
    mapping = {
        "Manager": "kappagotchi.core.manager",
        "View": "kappagotchi.ui.view",
        "Voice": "kappagotchi.ui.voice",
        "SnapshotStore": "kappagotchi.storage.snapshot",
        "RuleTable": "kappagotchi.core.rules",
    }

    if name in mapping:
        module = import_module(mapping[name])
        obj = getattr(module, name)
        globals()[name] = obj  # cache for future lookups
        return obj

    raise AttributeError(f"module 'kappagotchi' has no attribute '{name}'")


def main(argv=None) -> int:
    """Console-script entrypoint; see kappagotchi.cli."""
    from kappagotchi.cli import main as cli_main
    return cli_main(argv)
