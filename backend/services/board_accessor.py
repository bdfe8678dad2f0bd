"""Name-based queries over the lists, cards and members of a Trello board."""

from typing import Optional

from services.models import Board, BoardList, Card


class BoardAccessor:
    """Resolves lists, cards and members of the client's board.

    Lookups that find nothing return None or an empty list; remote failures
    propagate unchanged.
    """

    def __init__(self, client):
        self.client = client

    def lists(self) -> list:
        return self.client.list_lists()

    def resolve_list(self, name: str) -> Optional[BoardList]:
        """First list whose name is exactly ``name``."""
        for board_list in self.lists():
            if board_list.name == name:
                return board_list
        return None

    def query_lists(self, query: str, exclude: bool = False) -> list:
        """Lists whose name contains ``query``, in board order.

        With ``exclude`` the predicate is inverted, so both calls together
        partition the board's lists.
        """
        return [
            board_list for board_list in self.lists()
            if (query in board_list.name) != exclude
        ]

    def cards_of(self, board_list: BoardList) -> list:
        return self.client.list_cards(board_list.id, "list")

    def members_of(self, card: Card) -> list:
        return self.client.list_members(card.id)

    def board_info(self) -> Board:
        return self.client.get_board()

    def board_cards(self) -> list:
        return self.client.list_cards(self.client.board_id, "board")

    def done_product_backlog(self, sprint_number: int) -> list:
        """Names of the cards finished in a sprint."""
        board_list = self.resolve_list(f"Done - Sprint {sprint_number}")
        if board_list is None:
            return []
        return [card.name for card in self.cards_of(board_list)]

    def features_and_tests_dates(self) -> list:
        """(card, created date, due date) for every card in a "Done" list."""
        return [
            (card, card.created_date, card.due_date)
            for board_list in self.query_lists("Done")
            for card in self.cards_of(board_list)
        ]
