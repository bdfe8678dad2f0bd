"""Sprint and ceremony API endpoints."""

from flask import Blueprint, current_app, jsonify

from app.api.credentials import get_board_accessor
from services.ceremonies import CeremonyStatistics

bp = Blueprint("sprints", __name__, url_prefix="/api/sprints")

MISSING_CREDENTIALS = "Missing Trello credentials in headers"


def get_statistics():
    accessor = get_board_accessor()
    if accessor is None:
        return None
    return CeremonyStatistics(accessor)


@bp.route("/<int:sprint_number>/dates", methods=["GET"])
def get_sprint_dates(sprint_number):
    """Get start and end date of a sprint.

    Returns:
        - startDate: Due date of the sprint planning card (or null)
        - endDate: Due date of the sprint retrospective card (or null)
    """
    statistics = get_statistics()

    if statistics is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    try:
        start, end = statistics.sprint_dates(sprint_number)
        return jsonify({"data": {"sprint": sprint_number, "startDate": start, "endDate": end}})
    except Exception as e:
        current_app.logger.exception("Failed to fetch sprint dates")
        return jsonify({"error": str(e)}), 500


@bp.route("/<int:sprint_number>/ceremonies/<kind>", methods=["GET"])
def get_ceremony_description(sprint_number, kind):
    """Get the description of a ceremony (Planning, Review, Retrospective...)."""
    statistics = get_statistics()

    if statistics is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    try:
        description = statistics.ceremony_description(kind, sprint_number)
        return jsonify({"data": {"sprint": sprint_number, "kind": kind, "description": description}})
    except Exception as e:
        current_app.logger.exception("Failed to fetch ceremony description")
        return jsonify({"error": str(e)}), 500


@bp.route("/<int:sprint_number>/ceremonies", methods=["GET"])
def get_sprint_ceremonies(sprint_number):
    """Get the number of ceremonies held in a sprint."""
    statistics = get_statistics()

    if statistics is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    try:
        count = statistics.ceremonies_per_sprint(sprint_number)
        return jsonify({"data": {"sprint": sprint_number, "ceremonies": count}})
    except Exception as e:
        current_app.logger.exception("Failed to count sprint ceremonies")
        return jsonify({"error": str(e)}), 500


@bp.route("/ceremonies", methods=["GET"])
def get_ceremony_totals():
    """Get ceremony count and hours across all sprints."""
    statistics = get_statistics()

    if statistics is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    try:
        return jsonify({
            "data": {
                "totalCeremonies": statistics.total_ceremonies(),
                "totalHours": statistics.total_ceremony_hours()
            }
        })
    except Exception as e:
        current_app.logger.exception("Failed to compute ceremony totals")
        return jsonify({"error": str(e)}), 500
