"""Shared fixtures for the report tests."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from services.board_accessor import BoardAccessor
from services.models import Board, BoardList, Branch, Card, Collaborator, CommitRecord, Commits, Member


class FakeTrelloClient:
    """In-memory stand-in for TrelloClient.

    ``lists`` is a list of (BoardList, [(Card, [Member, ...]), ...]) pairs in
    board order.
    """

    def __init__(self, lists, board=None):
        self.lists = lists
        self.board = board or Board(name="ES-Board", id="614df1d076293f6b763c1c9c",
                                    url="https://trello.com/b/abc/es-board")
        self.board_id = self.board.id
        self.member_calls = []

    def list_boards(self):
        return [self.board]

    def get_board(self, board_id=None):
        return self.board

    def list_lists(self, board_id=None):
        return [board_list for board_list, _ in self.lists]

    def list_cards(self, container_id, container_kind="list"):
        if container_kind == "board":
            return [card for _, cards in self.lists for card, _ in cards]
        for board_list, cards in self.lists:
            if board_list.id == container_id:
                return [card for card, _ in cards]
        return []

    def list_members(self, card_id):
        self.member_calls.append(card_id)
        for _, cards in self.lists:
            for card, members in cards:
                if card.id == card_id:
                    return list(members)
        return []


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient.

    ``commits`` maps (branch, login) to commits ordered oldest first.
    """

    def __init__(self, collaborators, branches, commits, tags=None):
        self.collaborators = collaborators
        self.branches = branches
        self.commits = commits
        self.tags = tags or []

    def list_collaborators(self):
        return self.collaborators

    def list_branches(self):
        return self.branches

    def get_commits(self, branch, author=""):
        return Commits(user=author, commits=self.commits.get((branch, author), []))

    def get_tags(self):
        return self.tags


def member(name):
    return Member(username=name, id=f"id-{name}")


def card(name, desc="", due=None, card_id="6161b8f50e32ff864a928bd6"):
    return Card(name=name, id=card_id, desc=desc, due=due)


@pytest.fixture
def alice():
    return member("alice")


@pytest.fixture
def bob():
    return member("bob")


@pytest.fixture
def sample_lists(alice, bob):
    """A small board: backlog work, two sprints of ceremonies and a done list."""
    return [
        (BoardList(name="Product Backlog", id="l-backlog"), [
            (card("API client - Sprint 1", "@alice 4/3\n@bob 2/2", card_id="6161b8f50e32ff864a9280a1"),
             [alice, bob]),
            (card("GUI - Sprint 2", "@bob 5/4\n@carol 9/9", card_id="6161b8f50e32ff864a9280a2"),
             [bob]),
        ]),
        (BoardList(name="Ceremonies - Sprint 1", id="l-cer-1"), [
            (card("Sprint Planning - Sprint 1", "Plan\n@global 3/3\n@alice 3/3\n@bob 3/3",
                  due="2021-10-09T12:00:00.000Z", card_id="6161b8f50e32ff864a9280b1"), [alice, bob]),
            (card("Sprint Review - Sprint 1", "Review\n@global 1/1\n@alice 1/1",
                  due="2021-10-30T12:00:00.000Z", card_id="6161b8f50e32ff864a9280b2"), [alice]),
            (card("Sprint Retrospective - Sprint 1", "Retro\n@global 1/1\n@bob 1/1",
                  due="2021-10-30T13:00:00.000Z", card_id="6161b8f50e32ff864a9280b3"), [bob]),
        ]),
        (BoardList(name="Ceremonies - Sprint 2", id="l-cer-2"), [
            (card("Sprint Planning - Sprint 2", "@global .5/1", due="2021-11-01T12:00:00.000Z",
                  card_id="6161b8f50e32ff864a9280c1"), []),
        ]),
        (BoardList(name="Done - Sprint 1", id="l-done-1"), [
            (card("Home UI - Sprint 1", "@alice 2/1", due=None, card_id="6161b8f50e32ff864a9280d1"), [alice]),
        ]),
    ]


@pytest.fixture
def fake_trello(sample_lists):
    return FakeTrelloClient(sample_lists)


@pytest.fixture
def accessor(fake_trello):
    return BoardAccessor(fake_trello)


@pytest.fixture
def fake_github():
    collaborators = [Collaborator(login="alice"), Collaborator(login="bob")]
    branches = [Branch(name="main"), Branch(name="dev")]
    commits = {
        ("main", "alice"): [
            CommitRecord(date="2021-10-10", message="Initial commit"),
            CommitRecord(date="2021-10-11", message="Add client, with tests\n\nLong body"),
        ],
        ("dev", "alice"): [
            CommitRecord(date="2021-10-12", message="Dev work"),
        ],
        ("main", "bob"): [
            CommitRecord(date="2021-10-13", message="Fix build"),
        ],
    }
    return FakeGitHubClient(collaborators, branches, commits)


@pytest.fixture
def trello_headers():
    """Trello credential headers for endpoint tests."""
    return {
        "X-Trello-Key": "test-key",
        "X-Trello-Token": "test-token",
        "X-Trello-Board": "ES-Board"
    }


@pytest.fixture
def github_headers():
    return {"X-GitHub-Token": "gh-token"}


@pytest.fixture
def app(tmp_path):
    """Create Flask test app."""
    from app import create_app
    app = create_app(config_path=str(tmp_path / "missing.json"))
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()
