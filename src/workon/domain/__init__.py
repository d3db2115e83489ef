"""Domain layer: pure resolution and workspace logic.

Nothing in this package touches the filesystem or spawns processes.
Infrastructure and services import from here, never the reverse.
"""
