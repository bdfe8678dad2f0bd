"""Per-contributor hours aggregation."""

import logging

from services.annotations import parse_contributor_annotations
from services.models import ContributorHours

logger = logging.getLogger(__name__)


def fold_card(totals: dict, card, members: list) -> dict:
    """Return ``totals`` updated with one card's members and annotations.

    Members are registered before the description is parsed, so a member
    without annotations still shows up with zero totals. Annotations only
    count for the card's own members; anything else is dropped.
    """
    totals = dict(totals)
    member_names = [member.username for member in members]

    for name in member_names:
        if name not in totals:
            totals[name] = ContributorHours(user=name)

    for annotation in parse_contributor_annotations(card.desc):
        if annotation.user not in member_names:
            logger.debug(f"Dropping annotation for '{annotation.user}' on card '{card.name}'")
            continue
        totals[annotation.user] = totals[annotation.user].add(annotation.spent, annotation.estimated)

    return totals


def aggregate_hours(accessor, list_query: str, card_query: str, exclude: bool = False) -> list:
    """Fold the annotations of matching cards into per-contributor totals.

    Args:
        accessor: BoardAccessor for the board
        list_query: Substring the list names must contain (or not, with ``exclude``)
        card_query: Substring the card names must contain
        exclude: Invert the list predicate

    Returns:
        ContributorHours records in order of first registration
    """
    totals = {}

    for board_list in accessor.query_lists(list_query, exclude):
        for card in accessor.cards_of(board_list):
            if card_query not in card.name:
                continue
            totals = fold_card(totals, card, accessor.members_of(card))

    return list(totals.values())


def total_spent(hours: list) -> float:
    return sum((entry.spent_hours for entry in hours), 0.0)


def total_cost(hours: list, rate: float) -> float:
    return sum((entry.cost(rate) for entry in hours), 0.0)
