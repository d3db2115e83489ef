"""Pluggy hook specifications for workon events.

Hooks fire synchronously after the corresponding step succeeds.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("workon")


class WorkonHookSpec:
    """Hook specifications for the workon plugin system."""

    @hookspec
    def post_resolve(self, identity: str, directory: str) -> None:
        """Called after a pattern resolved to exactly one module."""

    @hookspec
    def post_launch(self, identity: str, directory: str, workspace: str | None) -> None:
        """Called after the terminal and editor were started.

        *workspace* is the ``"<n>:<label>"`` target switched to, if any.
        """
