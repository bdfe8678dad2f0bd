"""Time-tracking annotations embedded in card descriptions.

A card description records the hours each member spent on it as
``@<user> <spent>/<estimated>`` fragments, and the card's overall effort as
``@global <spent>/<estimated>``. Numbers are decimals that may omit the
leading zero (``.5``).

The per-contributor pattern also matches the global fragment, since
``global`` is a valid user token. The two totals are therefore extracted in
separate passes with separate patterns and never filtered out of one another.
"""

import re
from typing import NamedTuple, Optional

GLOBAL_USER = "global"

_NUMBER = r"(\d*\.?\d+)"

CONTRIBUTOR_PATTERN = re.compile(rf"@(\S+) {_NUMBER}/{_NUMBER}")
GLOBAL_PATTERN = re.compile(rf"@{GLOBAL_USER} {_NUMBER}/{_NUMBER}")


class Annotation(NamedTuple):
    user: str
    spent: float
    estimated: float


def parse_contributor_annotations(description: Optional[str]) -> list:
    """Extract every ``@user spent/estimated`` fragment, in textual order."""
    if not description:
        return []

    return [
        Annotation(match.group(1), float(match.group(2)), float(match.group(3)))
        for match in CONTRIBUTOR_PATTERN.finditer(description)
    ]


def parse_global_annotations(description: Optional[str]) -> list:
    """Extract every ``@global spent/estimated`` fragment, in textual order."""
    if not description:
        return []

    return [
        Annotation(GLOBAL_USER, float(match.group(1)), float(match.group(2)))
        for match in GLOBAL_PATTERN.finditer(description)
    ]


def total_global_spent(description: Optional[str]) -> float:
    return sum((annotation.spent for annotation in parse_global_annotations(description)), 0.0)
