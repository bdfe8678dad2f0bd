"""Tests for the CSV and HTML report rendering."""

import datetime

from services.models import TagRecord
from services.report_renderer import (
    ceremony_breakdown,
    format_number,
    render_commit_timeline,
    render_cost_report,
    render_tags,
    sprint_tables,
    suppress_repeats,
)


def test_format_number():
    assert format_number(3) == "3.0"
    assert format_number(12.5) == "12.5"


class TestCostReport:

    def test_sprint_tables(self, accessor):
        hours, cost = sprint_tables(accessor, rate=10, sprint_count=2)

        assert hours == (
            "Sprint,Contributor,Spent Hours,Estimated Hours\n"
            "1,alice,10.0,8.0\n"
            "1,bob,6.0,6.0\n"
            "2,bob,5.0,4.0\n"
        )
        assert cost == (
            "Sprint,Contributor,Cost\n"
            "1,alice,100.0\n"
            "1,bob,60.0\n"
            "2,bob,50.0\n"
            ",Total,210.0\n"
        )

    def test_zero_sprints_still_reports_total(self, accessor):
        hours, cost = sprint_tables(accessor, rate=1, sprint_count=0)

        assert hours == "Sprint,Contributor,Spent Hours,Estimated Hours\n"
        assert cost == "Sprint,Contributor,Cost\n,Total,21.0\n"

    def test_artifact_breakdown_counts_every_non_ceremony_card(self, accessor):
        """The Global row counts all cards of the lists, annotated or not."""
        table = ceremony_breakdown(accessor, rate=10, exclude=True)

        assert table == (
            "Contributor,Activities,Hours,Cost\n"
            "alice,2,6.0,60.0\n"
            "bob,2,7.0,70.0\n"
            "Global,3,13.0,130.0\n"
        )

    def test_ceremony_breakdown(self, accessor):
        table = ceremony_breakdown(accessor, rate=10, exclude=False)

        assert table.splitlines() == [
            "Contributor,Activities,Hours,Cost",
            "alice,2,4.0,40.0",
            "bob,2,4.0,40.0",
            "Global,4,8.0,80.0",
        ]

    def test_sections_in_order(self, accessor):
        report = render_cost_report(accessor, rate=10, sprint_count=2)
        sections = report.split("\n\n")

        assert len(sections) == 4
        assert sections[0].startswith("Sprint,Contributor,Spent Hours")
        assert sections[1].startswith("Sprint,Contributor,Cost")
        assert sections[2].startswith("Cards that produced artifacts\nContributor,Activities")
        assert sections[3].startswith("Cards that did not produce artifacts\nContributor,Activities")
        assert report.endswith("Global,4,8.0,80.0\n")


class TestSuppressRepeats:

    def test_blanks_repeated_leading_columns(self):
        rows = suppress_repeats([
            ("alice", "main", 1),
            ("alice", "main", 2),
            ("alice", "dev", 3),
            ("bob", "dev", 4),
        ])

        assert rows == [
            ("alice", "main", 1),
            ("", "", 2),
            ("", "dev", 3),
            ("bob", "", 4),
        ]

    def test_only_second_of_identical_rows_is_blank(self):
        rows = suppress_repeats([("alice", "main", 1), ("alice", "main", 2)])

        assert rows[0][:2] == ("alice", "main")
        assert rows[1][:2] == ("", "")

    def test_empty(self):
        assert suppress_repeats([]) == []


class TestCommitTimeline:

    def test_csv(self, fake_github):
        csv, _ = render_commit_timeline(fake_github)

        assert csv == (
            "Contributor,Branch,Commit Message,Commit Date\n"
            "alice,main,Initial commit,2021-10-10\n"
            ",,Add client  with tests,2021-10-11\n"
            ",dev,Dev work,2021-10-12\n"
            "bob,main,Fix build,2021-10-13\n"
        )

    def test_html(self, fake_github):
        _, html = render_commit_timeline(fake_github)

        assert html.startswith("<table border=1>\n<tr>\n    <th>Contributor</th>")
        assert html.endswith("</table>")
        assert html.count("<tr>") == 5
        assert "<td>Add client, with tests<br><br>Long body</td>" in html

    def test_no_commits(self, fake_github):
        fake_github.commits = {}

        csv, html = render_commit_timeline(fake_github)

        assert csv == "Contributor,Branch,Commit Message,Commit Date\n"
        assert html.count("<tr>") == 1


def test_render_tags(fake_github):
    fake_github.tags = [
        TagRecord(name="v0.1", date=datetime.date(2021, 10, 30)),
        TagRecord(name="v0.2", date=datetime.date(2021, 11, 20)),
    ]

    assert render_tags(fake_github) == "Tag,Date\nv0.1,2021-10-30\nv0.2,2021-11-20\n"
