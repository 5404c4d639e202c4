"""An in-memory, operation-log task database with working sets, undo and snapshots."""

__version__ = "0.1.0"