"""CSV and HTML rendering of the hours, cost and commit reports.

CSV output uses ``,`` as delimiter and ``\\n`` line endings with no quoting;
commas inside commit messages are replaced by spaces. HTML output is a single
``<table border=1>`` with unescaped cell contents.
"""

import logging

from services.ceremonies import CEREMONIES
from services.hours import aggregate_hours, total_cost, total_spent

logger = logging.getLogger(__name__)

HOURS_HEADER = "Sprint,Contributor,Spent Hours,Estimated Hours"
COST_HEADER = "Sprint,Contributor,Cost"
BREAKDOWN_HEADER = "Contributor,Activities,Hours,Cost"
COMMIT_HEADER = "Contributor,Branch,Commit Message,Commit Date"
TAG_HEADER = "Tag,Date"

ARTIFACT_TITLE = "Cards that produced artifacts"
CEREMONY_TITLE = "Cards that did not produce artifacts"

HTML_COMMIT_HEADER = """<tr>
    <th>Contributor</th>
    <th>Branch</th>
    <th>Commit Message</th>
    <th>Commit Date</th>
</tr>
"""

HTML_COMMIT_ROW = """<tr>
    <td>{}</td>
    <td>{}</td>
    <td>{}</td>
    <td>{}</td>
</tr>
"""


def format_number(value) -> str:
    """Locale-independent decimal text ("3.0", "12.5")."""
    return repr(float(value))


def _table(header: str, rows: list) -> str:
    return "".join(f"{line}\n" for line in [header, *rows])


def sprint_tables(accessor, rate: float, sprint_count: int) -> tuple:
    """Hours-by-sprint and cost-by-sprint tables for sprints 1..sprint_count."""
    hours_rows = []
    cost_rows = []

    for sprint_number in range(1, sprint_count + 1):
        for entry in aggregate_hours(accessor, "", f"Sprint {sprint_number}"):
            hours_rows.append(
                f"{sprint_number},{entry.user},"
                f"{format_number(entry.spent_hours)},{format_number(entry.estimated_hours)}"
            )
            cost_rows.append(f"{sprint_number},{entry.user},{format_number(entry.cost(rate))}")

    overall = aggregate_hours(accessor, "", "")
    cost_rows.append(f",Total,{format_number(total_cost(overall, rate))}")

    return _table(HOURS_HEADER, hours_rows), _table(COST_HEADER, cost_rows)


def ceremony_breakdown(accessor, rate: float, exclude: bool) -> str:
    """Per-contributor activity and cost over ceremony lists (or every other list).

    The trailing Global row counts every card of the selected lists, not only
    the ones that carried annotations.
    """
    hours = aggregate_hours(accessor, CEREMONIES, "", exclude)
    rows = [
        f"{entry.user},{entry.cards},{format_number(entry.spent_hours)},"
        f"{format_number(entry.cost(rate))}"
        for entry in hours
    ]

    card_count = sum(
        len(accessor.cards_of(board_list))
        for board_list in accessor.query_lists(CEREMONIES, exclude)
    )
    spent = total_spent(hours)
    rows.append(f"Global,{card_count},{format_number(spent)},{format_number(spent * rate)}")

    return _table(BREAKDOWN_HEADER, rows)


def render_cost_report(accessor, rate: float, sprint_count: int) -> str:
    """Combined CSV of hours, cost and ceremony breakdown sections."""
    logger.info(f"Rendering cost report for {sprint_count} sprints at rate {rate}")

    hours_table, cost_table = sprint_tables(accessor, rate, sprint_count)
    artifacts = ceremony_breakdown(accessor, rate, exclude=True)
    ceremonies = ceremony_breakdown(accessor, rate, exclude=False)

    return "\n".join([
        hours_table,
        cost_table,
        f"{ARTIFACT_TITLE}\n{artifacts}",
        f"{CEREMONY_TITLE}\n{ceremonies}",
    ])


def suppress_repeats(entries) -> list:
    """Blank the contributor and branch of rows that repeat the previous row's.

    ``entries`` yields (contributor, branch, commit) triples; each of the two
    leading columns is compared on its own against the previous row.
    """
    rows = []
    previous_user = ""
    previous_branch = ""

    for user, branch, commit in entries:
        rows.append((
            "" if user == previous_user else user,
            "" if branch == previous_branch else branch,
            commit,
        ))
        previous_user = user
        previous_branch = branch

    return rows


def timeline_entries(github):
    """(login, branch, commit) for every collaborator and branch, oldest commit first."""
    for collaborator in github.list_collaborators():
        for branch in github.list_branches():
            for commit in github.get_commits(branch.name, collaborator.login).commits:
                yield collaborator.login, branch.name, commit


def render_commit_timeline(github) -> tuple:
    """Commit timeline as (csv, html) text."""
    csv_rows = []
    html_rows = [HTML_COMMIT_HEADER]

    for user, branch, commit in suppress_repeats(timeline_entries(github)):
        first_line = commit.message.replace(",", " ").split("\n")[0]
        csv_rows.append(f"{user},{branch},{first_line},{commit.date}")
        html_rows.append(
            HTML_COMMIT_ROW.format(user, branch, commit.message.replace("\n", "<br>"), commit.date)
        )

    logger.info(f"Rendered commit timeline with {len(csv_rows)} commits")
    return _table(COMMIT_HEADER, csv_rows), "<table border=1>\n" + "".join(html_rows) + "</table>"


def render_tags(github) -> str:
    return _table(TAG_HEADER, [f"{tag.name},{tag.date}" for tag in github.get_tags()])
