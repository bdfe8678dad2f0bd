"""Trello REST API client."""

import logging
from typing import Optional

import requests
from pydantic import TypeAdapter

from services.models import Board, BoardList, Card, Member

logger = logging.getLogger(__name__)

TRELLO_API = "https://api.trello.com/1"

# Board id used when the configured board name matches no board of the user
BOARD_NOT_FOUND = "not found"

CONTAINER_KINDS = ("board", "list")

_boards_adapter = TypeAdapter(list[Board])
_lists_adapter = TypeAdapter(list[BoardList])
_cards_adapter = TypeAdapter(list[Card])
_members_adapter = TypeAdapter(list[Member])


class TrelloClient:
    """Client for the Trello REST API, bound to one board by name.

    Every call is a single request. HTTP errors and undecodable payloads
    propagate to the caller.
    """

    def __init__(self, key: str, token: str, board_name: str, server: str = TRELLO_API):
        self.key = key
        self.token = token
        self.board_name = board_name
        self.server = server.rstrip("/")
        self._board_id = None

    def _request(self, endpoint: str, params: Optional[dict] = None):
        """Make authenticated request to Trello API."""
        query = {"key": self.key, "token": self.token}
        if params:
            query.update(params)

        response = requests.get(
            f"{self.server}{endpoint}",
            headers={"Accept": "application/json"},
            params=query,
            timeout=30
        )
        response.raise_for_status()
        return response.json()

    @property
    def board_id(self) -> str:
        if self._board_id is None:
            self._board_id = self.resolve_board_id(self.board_name)
        return self._board_id

    def list_boards(self) -> list:
        """All boards the token's member belongs to."""
        return _boards_adapter.validate_python(self._request("/members/me/boards"))

    def resolve_board_id(self, board_name: str) -> str:
        for board in self.list_boards():
            if board.name == board_name:
                logger.info(f"Resolved board '{board_name}' to {board.id}")
                return board.id

        logger.warning(f"No board named '{board_name}'")
        return BOARD_NOT_FOUND

    def get_board(self, board_id: Optional[str] = None) -> Board:
        board_id = board_id or self.board_id
        return Board.model_validate(self._request(f"/boards/{board_id}"))

    def list_lists(self, board_id: Optional[str] = None) -> list:
        board_id = board_id or self.board_id
        return _lists_adapter.validate_python(self._request(f"/boards/{board_id}/lists"))

    def list_cards(self, container_id: str, container_kind: str = "list") -> list:
        """Cards of a list or of a whole board, in Trello's order."""
        if container_kind not in CONTAINER_KINDS:
            raise ValueError(f"Cards can only be listed for {CONTAINER_KINDS}, not '{container_kind}'")

        return _cards_adapter.validate_python(
            self._request(f"/{container_kind}s/{container_id}/cards")
        )

    def list_members(self, card_id: str) -> list:
        return _members_adapter.validate_python(self._request(f"/cards/{card_id}/members"))
