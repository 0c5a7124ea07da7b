"""Hook specifications for quell input plugins.

Input plugins turn some on-disk representation of a linted file into a
LintDocument (directives plus problems). Plugins use the @hookimpl decorator
to register their implementations.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from quell.models.document import LintDocument

hookspec = pluggy.HookspecMarker("quell")


class QuellHookSpec:
    """Hook specification defining the plugin interface.

    The application calls these hooks through the pluggy PluginManager.
    """

    @hookspec
    def can_handle(self, path: Path) -> float:
        """Determine if this plugin can read the given file.

        Args:
            path: Path to the input file to check.

        Returns:
            Confidence score from 0.0 to 1.0:
            - 0.0: Cannot handle this file
            - 0.5: Might be able to handle (ambiguous)
            - 1.0: Definitely can handle this file

            A single plugin at or above 0.5 is selected; none or several
            is an error.
        """

    @hookspec
    def load_document(self, path: Path) -> "LintDocument":
        """Read the file into a LintDocument.

        Plugins must return problems sorted by position.

        Args:
            path: Path to the input file.

        Returns:
            LintDocument with the file's directives and problems.
        """
