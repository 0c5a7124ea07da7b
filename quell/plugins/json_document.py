"""Built-in plugin for quell's JSON lint documents."""

from __future__ import annotations

import json
from pathlib import Path

from quell.core.loader import DocumentLoader
from quell.models.document import LintDocument
from quell.plugin import QuellPlugin, hookimpl

# Bytes read when sniffing a file's content
_SNIFF_BYTES = 4096


class JsonDocumentPlugin(QuellPlugin):
    """Reads ``{"directives": [...], "problems": [...]}`` JSON documents."""

    name = "json"
    version = "1.0.0"
    description = "JSON documents with directives and problems lists"

    def __init__(self) -> None:
        self._loader = DocumentLoader()

    @hookimpl
    def can_handle(self, path: Path) -> float:
        """Score a file by suffix and by whether it opens a JSON object.

        Returns:
            1.0 for a .json file whose text mentions a known section,
            0.6 for any other .json file, 0.5 for suffix-less JSON objects
            mentioning a section, and 0.0 otherwise.
        """
        try:
            with path.open("r", encoding="utf-8") as f:
                head = f.read(_SNIFF_BYTES)
        except (OSError, UnicodeDecodeError):
            return 0.0

        stripped = head.lstrip()
        if not stripped.startswith("{"):
            return 0.0

        mentions_section = any(
            json.dumps(section) in head for section in DocumentLoader.SECTIONS
        )
        if path.suffix.lower() == ".json":
            return 1.0 if mentions_section else 0.6
        return 0.5 if mentions_section else 0.0

    @hookimpl
    def load_document(self, path: Path) -> LintDocument:
        """Load and validate the document.

        Raises:
            DocumentError: If the file is not a valid lint document.
        """
        return self._loader.load(path)
