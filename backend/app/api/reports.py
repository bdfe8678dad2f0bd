"""Hours, cost and commit report endpoints."""

from flask import Blueprint, Response, current_app, request, jsonify

from app.api.boards import MISSING_CREDENTIALS, get_exclude_flag
from app.api.credentials import get_board_accessor, get_github_client, report_config
from services.hours import aggregate_hours
from services.report_renderer import render_commit_timeline, render_cost_report

bp = Blueprint("reports", __name__, url_prefix="/api/reports")


def get_rate():
    """Get the hourly rate from query params, falling back to the config.

    Returns:
        float or None when the param is not a number
    """
    rate = request.args.get("rate")
    if rate is None:
        return float(report_config().get("hourlyRate", 0))
    try:
        return float(rate)
    except ValueError:
        return None


def get_sprint_count():
    """Get the number of sprints from query params, falling back to the config.

    Returns:
        int or None when the param is not a non-negative integer
    """
    sprint_count = request.args.get("sprints")
    if sprint_count is None:
        return int(report_config().get("sprintCount", 1))
    try:
        value = int(sprint_count)
    except ValueError:
        return None
    return value if value >= 0 else None


@bp.route("/hours", methods=["GET"])
def get_hours():
    """Get spent and estimated hours per contributor.

    Query params:
        - list: Substring the list names must contain (default: all lists)
        - card: Substring the card names must contain (default: all cards)
        - exclude: Use the lists that do NOT contain ``list``
    """
    accessor = get_board_accessor()

    if accessor is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    list_query = request.args.get("list", "")
    card_query = request.args.get("card", "")

    try:
        hours = aggregate_hours(accessor, list_query, card_query, get_exclude_flag())
        return jsonify({"data": [entry.model_dump(mode="json") for entry in hours]})
    except Exception as e:
        current_app.logger.exception("Failed to aggregate hours")
        return jsonify({"error": str(e)}), 500


@bp.route("/cost", methods=["GET"])
def get_cost_report():
    """Get the cost report as CSV.

    Query params:
        - rate: Hourly rate (default: configured hourlyRate)
        - sprints: Number of sprints to report (default: configured sprintCount)
    """
    accessor = get_board_accessor()

    if accessor is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    rate = get_rate()
    sprint_count = get_sprint_count()

    if rate is None or sprint_count is None:
        return jsonify({"error": "Invalid rate or sprints parameter"}), 400

    try:
        csv = render_cost_report(accessor, rate, sprint_count)
    except Exception as e:
        current_app.logger.exception("Failed to render cost report")
        return jsonify({"error": str(e)}), 500

    return Response(csv, mimetype="text/csv")


@bp.route("/commits", methods=["GET"])
def get_commit_timeline():
    """Get the commit timeline per collaborator and branch.

    Query params:
        - format: "csv" (default) or "html"
        - owner, repo: Repository (default: configured githubOwner/githubRepo)
    """
    github = get_github_client()

    if github is None:
        return jsonify({"error": "Missing GitHub credentials or repository"}), 401

    output_format = request.args.get("format", "csv").lower()
    if output_format not in ("csv", "html"):
        return jsonify({"error": f"Unsupported format: {output_format}"}), 400

    try:
        csv, html = render_commit_timeline(github)
    except Exception as e:
        current_app.logger.exception("Failed to render commit timeline")
        return jsonify({"error": str(e)}), 500

    if output_format == "html":
        return Response(html, mimetype="text/html")
    return Response(csv, mimetype="text/csv")
