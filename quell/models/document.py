"""LintDocument data model for quell."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from quell.models.directive import RawDirective
from quell.models.problem import Problem


class LintDocument(BaseModel):
    """The directives and problems collected for one linted source text.

    Attributes:
        directives: Directives found in the source, in any order.
        problems: Problems reported by rules, sorted by position.
        path: Optional path of the file the data was read from.
    """

    model_config = ConfigDict(frozen=False)

    directives: list[RawDirective] = []
    problems: list[Problem] = []
    path: Optional[str] = None
