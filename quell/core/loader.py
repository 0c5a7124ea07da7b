"""Lint document loading and validation for quell.

This module provides DocumentLoader, which reads the JSON documents that
hand directives and problems over to the reconciler. Document format:

    {
      "directives": [
        {"type": "disable-next-line", "ruleId": "no-undef", "line": 4, "column": 1}
      ],
      "problems": [
        {"ruleId": "no-undef", "line": 5, "column": 3, "severity": 2,
         "message": "'x' is not defined."}
      ]
    }

A directive's "type" may also be spelled "kind"; a missing or null "ruleId"
means the directive applies to all rules. Problem fields beyond the known
ones are kept as payload.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from quell.models.directive import RawDirective
from quell.models.document import LintDocument
from quell.models.position import location_key
from quell.models.problem import Problem
from quell.utils.validation import summarize_validation_error


class DocumentError(Exception):
    """Exception raised for unreadable or invalid lint documents.

    Attributes:
        message: Error description
        path: Path to the document (if available)
        section: "directives" or "problems" (if the error is in an entry)
        index: Index of the offending entry (if available)
        line: Line number in the document (JSON syntax errors only)
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        section: Optional[str] = None,
        index: Optional[int] = None,
        line: Optional[int] = None,
    ):
        self.path = path
        self.section = section
        self.index = index
        self.line = line

        parts = []
        if path:
            parts.append(f"Error in {path}")
        if section is not None and index is not None:
            parts.append(f"{section} entry {index + 1}")
        if line is not None:
            parts.append(f"at line {line}")
        if parts:
            full_message = f"{' '.join(parts)}: {message}"
        else:
            full_message = message

        super().__init__(full_message)


class DocumentLoader:
    """Loader for quell JSON lint documents.

    Problems are sorted by position on load, so the reconciler's
    sorted-input precondition holds for anything this loader returns.

    Example usage:
        loader = DocumentLoader()
        document = loader.load(Path("report.json"))
    """

    SECTIONS = ("directives", "problems")

    def load(self, path: Path) -> LintDocument:
        """Load a lint document from a JSON file.

        Args:
            path: Path to the JSON document

        Returns:
            LintDocument with validated directives and sorted problems

        Raises:
            DocumentError: If the file is not UTF-8 JSON or an entry is invalid
            FileNotFoundError: If the file doesn't exist
        """
        if not path.exists():
            raise FileNotFoundError(f"Document not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DocumentError(f"Invalid UTF-8: {e.reason}", path=path) from e

        return self.load_from_string(content, path=path)

    def load_from_string(self, content: str, path: Optional[Path] = None) -> LintDocument:
        """Load a lint document from a JSON string.

        Args:
            content: JSON content as a string
            path: Optional path for error reporting

        Returns:
            LintDocument with validated directives and sorted problems

        Raises:
            DocumentError: If the content is not valid JSON or an entry is invalid
        """
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise DocumentError(f"Invalid JSON: {e.msg}", path=path, line=e.lineno) from e

        return self.parse(data, path=path)

    def parse(self, data: Any, path: Optional[Path] = None) -> LintDocument:
        """Validate already-decoded document data.

        Args:
            data: Decoded JSON value
            path: Optional path for error reporting

        Returns:
            LintDocument with validated directives and sorted problems

        Raises:
            DocumentError: If the data does not describe a lint document
        """
        if not isinstance(data, dict):
            raise DocumentError("Document must be a JSON object", path=path)

        for section in self.SECTIONS:
            if not isinstance(data.get(section, []), list):
                raise DocumentError(f"'{section}' must be a list", path=path)

        directives = [
            self._parse_directive(entry, i, path)
            for i, entry in enumerate(data.get("directives", []))
        ]
        problems = [
            self._parse_problem(entry, i, path)
            for i, entry in enumerate(data.get("problems", []))
        ]

        return LintDocument(
            directives=directives,
            problems=sorted(problems, key=location_key),
            path=str(path) if path else None,
        )

    def _parse_directive(self, entry: Any, index: int, path: Optional[Path]) -> RawDirective:
        """Parse and validate a single directive entry.

        Raises:
            DocumentError: If validation fails
        """
        if not isinstance(entry, dict):
            raise DocumentError("Entry must be an object", path=path, section="directives", index=index)

        entry = dict(entry)
        if "type" not in entry and "kind" in entry:
            entry["type"] = entry.pop("kind")
        if "type" not in entry:
            raise DocumentError(
                "Missing required field: type",
                path=path,
                section="directives",
                index=index,
            )

        try:
            return RawDirective.model_validate(entry)
        except ValidationError as e:
            raise DocumentError(
                summarize_validation_error(e), path=path, section="directives", index=index
            ) from e

    def _parse_problem(self, entry: Any, index: int, path: Optional[Path]) -> Problem:
        """Parse and validate a single problem entry.

        Raises:
            DocumentError: If validation fails
        """
        if not isinstance(entry, dict):
            raise DocumentError("Entry must be an object", path=path, section="problems", index=index)

        try:
            return Problem.model_validate(entry)
        except ValidationError as e:
            raise DocumentError(
                summarize_validation_error(e), path=path, section="problems", index=index
            ) from e
