"""GitHub REST API client for repository history."""

import logging
from typing import Optional

import requests
from pydantic import TypeAdapter

from services.models import (
    Branch,
    Collaborator,
    CommitRecord,
    Commits,
    RepositoryMeta,
    Tag,
    TagRecord,
)

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"
RAW_CONTENT = "https://raw.githubusercontent.com"

# Largest page size the listing endpoints accept
PER_PAGE = 100

_collaborators_adapter = TypeAdapter(list[Collaborator])
_branches_adapter = TypeAdapter(list[Branch])
_commits_adapter = TypeAdapter(list[CommitRecord])
_tags_adapter = TypeAdapter(list[Tag])


class UnexpectedPageError(ValueError):
    """Raised when a page of a listing endpoint is not a JSON array."""

    def __init__(self, page: int, payload, endpoint: str = "/commits"):
        self.page = page
        self.payload = payload
        self.endpoint = endpoint
        super().__init__(f"Page {page} of {endpoint} is not a list: {str(payload)[:200]}")


class GitHubClient:
    """Client for one GitHub repository.

    Collaborators and branches are fetched once and reused for the lifetime
    of the client.
    """

    def __init__(self, owner: str, repo: str, token: str, server: str = GITHUB_API,
                 raw_server: str = RAW_CONTENT):
        self.owner = owner
        self.repo = repo
        self.token = token
        self.server = server.rstrip("/")
        self.base_url = f"{self.server}/repos/{owner}/{repo}"
        self.raw_url = f"{raw_server.rstrip('/')}/{owner}/{repo}"
        self._collaborators_cache = None
        self._branches_cache = None

    def _get(self, url: str, params: Optional[dict] = None) -> requests.Response:
        return requests.get(
            url,
            headers={
                "Authorization": f"Bearer {self.token}",
                "Accept": "application/vnd.github+json",
            },
            params=params,
            timeout=30
        )

    def _request(self, endpoint: str, params: Optional[dict] = None):
        """Make authenticated request against the repository endpoint."""
        response = self._get(f"{self.base_url}{endpoint}", params)
        response.raise_for_status()
        return response.json()

    def _request_pages(self, endpoint: str) -> list:
        """Every item of a listing endpoint, following pages until a short one."""
        items = []
        page = 1

        while True:
            payload = self._request(endpoint, {"per_page": PER_PAGE, "page": page})
            if not isinstance(payload, list):
                logger.warning(f"Unexpected page {page} for {endpoint}")
                raise UnexpectedPageError(page, payload, endpoint)

            items.extend(payload)
            if len(payload) < PER_PAGE:
                break
            page += 1

        return items

    def get_repo_meta(self) -> RepositoryMeta:
        return RepositoryMeta.model_validate(self._request(""))

    def list_collaborators(self) -> list:
        """Repository collaborators, each with the display name from their profile."""
        if self._collaborators_cache:
            return self._collaborators_cache

        collaborators = []
        for collaborator in _collaborators_adapter.validate_python(self._request_pages("/collaborators")):
            response = self._get(f"{self.server}/users/{collaborator.login}")
            response.raise_for_status()
            collaborators.append(
                collaborator.model_copy(update={"name": response.json().get("name")})
            )

        self._collaborators_cache = collaborators
        return collaborators

    def list_branches(self) -> list:
        if self._branches_cache:
            return self._branches_cache

        self._branches_cache = _branches_adapter.validate_python(self._request_pages("/branches"))
        return self._branches_cache

    def list_commits(self, branch: str, author: str = "", page: int = 1) -> list:
        """One page of commits on a branch, newest first.

        An empty list means there are no more pages.
        """
        params = {"sha": branch, "page": page}
        if author:
            params["author"] = author

        payload = self._request("/commits", params)
        if not isinstance(payload, list):
            logger.warning(f"Unexpected commit page {page} for {branch}/{author or '*'}")
            raise UnexpectedPageError(page, payload)

        return _commits_adapter.validate_python(payload)

    def get_commits(self, branch: str, author: str = "") -> Commits:
        """All commits of ``author`` on ``branch``, oldest first.

        With an empty author every commit of the branch is returned.
        """
        commits = []
        page = 1

        while True:
            records = self.list_commits(branch, author, page)
            if not records:
                break

            logger.debug(f"Fetched {len(records)} commits from page {page} of {branch}")
            commits.extend(records)
            page += 1

        commits.reverse()
        return Commits(user=author, commits=commits)

    def get_commit(self, sha: str) -> CommitRecord:
        return CommitRecord.model_validate(self._request(f"/commits/{sha}"))

    def list_tags(self) -> list:
        return _tags_adapter.validate_python(self._request_pages("/tags"))

    def get_tags(self) -> list:
        """Release tags dated by the commit they point at."""
        return [
            TagRecord(name=tag.name, date=self.get_commit(tag.sha).date)
            for tag in self.list_tags()
        ]

    def get_file(self, branch: str, path: str) -> Optional[str]:
        """Raw contents of ``path`` (from the repository root) on ``branch``.

        Returns None when the file does not exist.
        """
        if not path.startswith("/"):
            path = f"/{path}"

        response = self._get(f"{self.raw_url}/{branch}{path}")
        if response.status_code == 404:
            return None

        response.raise_for_status()
        return response.text
