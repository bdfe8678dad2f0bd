"""Sprint boundaries and ceremony statistics.

Each sprint has a list named "Ceremonies - Sprint <n>" holding one card per
ceremony ("Sprint Planning - Sprint <n>", "Sprint Review - Sprint <n>", ...).
The planning card's due date is the sprint start and the retrospective
card's due date is the sprint end.
"""

from typing import Optional

from services.annotations import total_global_spent

CEREMONIES = "Ceremonies"


def ceremonies_list_name(sprint_number: int) -> str:
    return f"{CEREMONIES} - Sprint {sprint_number}"


def ceremony_card_name(kind: str, sprint_number: int) -> str:
    return f"Sprint {kind} - Sprint {sprint_number}"


class CeremonyStatistics:
    """Statistics derived from the ceremonies lists of a board."""

    def __init__(self, accessor):
        self.accessor = accessor

    def sprint_dates(self, sprint_number: int) -> tuple:
        """(start, end) dates of a sprint; a part is None when its card is missing."""
        start: Optional[str] = None
        end: Optional[str] = None

        board_list = self.accessor.resolve_list(ceremonies_list_name(sprint_number))
        if board_list is None:
            return start, end

        planning = ceremony_card_name("Planning", sprint_number)
        retrospective = ceremony_card_name("Retrospective", sprint_number)

        for card in self.accessor.cards_of(board_list):
            if card.name == planning:
                start = card.due_date
            elif card.name == retrospective:
                end = card.due_date
                if start is not None:
                    break

        return start, end

    def ceremony_description(self, kind: str, sprint_number: int) -> str:
        board_list = self.accessor.resolve_list(ceremonies_list_name(sprint_number))
        if board_list is None:
            return ""

        name = ceremony_card_name(kind, sprint_number)
        for card in self.accessor.cards_of(board_list):
            if card.name == name:
                return card.desc
        return ""

    def total_ceremonies(self) -> int:
        return sum(
            len(self.accessor.cards_of(board_list))
            for board_list in self.accessor.query_lists(CEREMONIES)
        )

    def ceremonies_per_sprint(self, sprint_number: int) -> int:
        board_list = self.accessor.resolve_list(ceremonies_list_name(sprint_number))
        if board_list is None:
            return 0
        return len(self.accessor.cards_of(board_list))

    def total_ceremony_hours(self) -> float:
        """Hours recorded by the global annotations of every ceremony card."""
        return sum(
            (
                total_global_spent(card.desc)
                for board_list in self.accessor.query_lists(CEREMONIES)
                for card in self.accessor.cards_of(board_list)
            ),
            0.0,
        )
