"""Types specific to pr_labeler."""

from __future__ import annotations

import dataclasses
from typing import Dict

# A pull request as described by a JSON object.
PrDict = Dict


@dataclasses.dataclass(frozen=True)
class PrId:
    """An id of a pull request, with a repo full_name and an id."""
    full_name: str
    number: int

    def __str__(self):
        return f"{self.full_name}#{self.number}"
