"""Records decoded from the Trello and GitHub REST APIs.

All records are immutable snapshots of a single fetch. Unknown fields in the
remote payloads are ignored.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Reported in place of a missing card due date
NOT_APPLICABLE = "N/A"


def identifier_to_timestamp(identifier: str) -> datetime.date:
    """Return the creation date encoded in a Trello identifier.

    Trello ids start with the creation time as 8 hex digits of Unix seconds.
    """
    seconds = int(identifier[:8], 16)
    return datetime.datetime.fromtimestamp(seconds, tz=datetime.timezone.utc).date()


def iso_day(raw: str) -> str:
    """Strip the time part of an ISO-8601 timestamp ("2021-10-09T12:00:00Z" -> "2021-10-09")."""
    return raw.split("T")[0]


class Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Board(Record):
    name: str
    id: str
    url: str = ""


class BoardList(Record):
    name: str
    id: str


class Card(Record):
    name: str
    id: str
    due: Optional[str] = None
    desc: str = ""

    @field_validator("desc", mode="before")
    @classmethod
    def _empty_description(cls, value):
        return value or ""

    @property
    def due_date(self) -> str:
        """Due date as YYYY-MM-DD, or "N/A" when the card has none."""
        if not self.due:
            return NOT_APPLICABLE
        return iso_day(self.due)

    @property
    def created_date(self) -> str:
        return identifier_to_timestamp(self.id).isoformat()


class Member(Record):
    username: str
    id: str


class ContributorHours(Record):
    """Running totals for one contributor within one aggregation pass.

    A contributor's identity is ``user``: records are compared and hashed on
    it alone, so a record equals any other snapshot of the same contributor.
    Compare the totals fields to check the numbers.
    """

    user: str
    spent_hours: float = 0.0
    estimated_hours: float = 0.0
    cards: int = 0

    def __eq__(self, other):
        if not isinstance(other, ContributorHours):
            return NotImplemented
        return self.user == other.user

    def __hash__(self):
        return hash(self.user)

    def add(self, spent: float, estimated: float) -> "ContributorHours":
        return self.model_copy(update={
            "spent_hours": self.spent_hours + spent,
            "estimated_hours": self.estimated_hours + estimated,
            "cards": self.cards + 1,
        })

    def cost(self, rate: float) -> float:
        return self.spent_hours * rate


class Collaborator(Record):
    login: str
    avatar_url: str = ""
    html_url: str = ""
    name: Optional[str] = None


class Branch(Record):
    name: str


class CommitRecord(Record):
    date: datetime.date
    message: str

    @model_validator(mode="before")
    @classmethod
    def _unpack_commit(cls, data):
        # GitHub nests the interesting fields under "commit"
        if isinstance(data, dict) and "commit" in data:
            commit = data["commit"]
            if not isinstance(commit, dict):
                raise ValueError("commit must be an object")
            committer = commit.get("committer")
            date = committer.get("date") if isinstance(committer, dict) else None
            if not isinstance(date, str):
                raise ValueError("commit has no committer date")
            return {"date": iso_day(date), "message": commit.get("message", "")}
        return data


class Commits(Record):
    """Commits of one author on one branch, ordered oldest to newest.

    ``user`` is empty when the commits were fetched without an author filter.
    """

    user: str = ""
    commits: list[CommitRecord] = Field(default_factory=list)


class Tag(Record):
    name: str
    sha: str

    @model_validator(mode="before")
    @classmethod
    def _unpack_sha(cls, data):
        if isinstance(data, dict) and "sha" not in data:
            commit = data.get("commit")
            data = {**data, "sha": commit.get("sha") if isinstance(commit, dict) else None}
        return data


class TagRecord(Record):
    name: str
    date: datetime.date


class RepositoryMeta(Record):
    created_at: str

    @property
    def start_date(self) -> datetime.date:
        return datetime.date.fromisoformat(iso_day(self.created_at))
