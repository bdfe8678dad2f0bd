"""Credential extraction shared by the API blueprints.

Credentials travel as request headers on every call and are never stored.
Board and repository names fall back to the report config.
"""

from flask import current_app, request

from services.board_accessor import BoardAccessor
from services.github_client import GitHubClient
from services.trello_client import TrelloClient


def report_config():
    return current_app.config.get("REPORT", {})


def get_trello_credentials():
    """Extract Trello credentials and board name from request headers."""
    key = request.headers.get("X-Trello-Key")
    token = request.headers.get("X-Trello-Token")
    board = request.headers.get("X-Trello-Board") or report_config().get("boardName")

    if not all([key, token, board]):
        return None, None, None

    return key, token, board


def get_github_credentials():
    """Extract the GitHub token and target repository."""
    token = request.headers.get("X-GitHub-Token")
    owner = request.args.get("owner") or report_config().get("githubOwner")
    repo = request.args.get("repo") or report_config().get("githubRepo")

    if not all([token, owner, repo]):
        return None, None, None

    return owner, repo, token


def get_board_accessor():
    """BoardAccessor for the request's board, or None without credentials."""
    key, token, board = get_trello_credentials()
    if not key:
        return None
    return BoardAccessor(TrelloClient(key, token, board))


def get_github_client():
    owner, repo, token = get_github_credentials()
    if not owner:
        return None
    return GitHubClient(owner, repo, token)
