"""Plugin system for quell.

This module provides the plugin infrastructure using pluggy.
Plugins implement hooks defined in hookspec.py to read lint documents.

Usage:
    from quell.plugin import QuellPlugin, hookimpl

    class MyPlugin(QuellPlugin):
        name = "my-plugin"

        @hookimpl
        def can_handle(self, path):
            return 0.9 if path.suffix == ".mylint" else 0.0

        @hookimpl
        def load_document(self, path):
            return LintDocument(...)
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pluggy

from quell.plugin.hookspec import QuellHookSpec

if TYPE_CHECKING:
    from quell.models.document import LintDocument

hookimpl = pluggy.HookimplMarker("quell")

__all__ = ["QuellPlugin", "hookimpl", "QuellHookSpec"]


class QuellPlugin:
    """Base class for quell input plugins.

    Subclasses must define:
        name: Unique identifier for the plugin (str)

    Required hooks (must override):
        load_document(): Read a file into a LintDocument

    Optional hooks (have defaults):
        can_handle(): Detection (default: 0.0)

    Optional attributes:
        version: Plugin version string (str)
        description: Human-readable description (str)
    """

    name: str = "base"
    version: str = "0.0.0"
    description: str = ""

    @hookimpl
    def can_handle(self, path: Path) -> float:
        """Default implementation: cannot handle any files.

        Args:
            path: Path to the input file to check.

        Returns:
            0.0 (cannot handle) by default.
        """
        return 0.0

    @hookimpl
    def load_document(self, path: Path) -> "LintDocument":
        """REQUIRED: Read the file into a LintDocument.

        Raises:
            NotImplementedError: If not overridden by subclass.
        """
        raise NotImplementedError(
            f"Plugin '{self.name}' must implement load_document()."
        )
