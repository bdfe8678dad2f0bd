"""Board, list and card API endpoints."""

from flask import Blueprint, current_app, request, jsonify

from app.api.credentials import get_board_accessor

bp = Blueprint("boards", __name__, url_prefix="/api/boards")

MISSING_CREDENTIALS = "Missing Trello credentials in headers"


def get_exclude_flag():
    """Read the ``exclude`` query param as a boolean."""
    return request.args.get("exclude", "false").lower() in ("1", "true", "yes")


@bp.route("", methods=["GET"])
def list_boards():
    """List all boards accessible to the user.

    Requires headers:
        - X-Trello-Key: Trello API key
        - X-Trello-Token: Trello API token
        - X-Trello-Board: Board name (optional when configured)
    """
    accessor = get_board_accessor()

    if accessor is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    try:
        boards = accessor.client.list_boards()
        return jsonify({"data": [board.model_dump(mode="json") for board in boards]})
    except Exception as e:
        current_app.logger.exception("Failed to list boards")
        return jsonify({"error": str(e)}), 500


@bp.route("/current", methods=["GET"])
def get_current_board():
    """Get name, id and url of the selected board."""
    accessor = get_board_accessor()

    if accessor is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    try:
        return jsonify({"data": accessor.board_info().model_dump(mode="json")})
    except Exception as e:
        current_app.logger.exception("Failed to fetch board")
        return jsonify({"error": str(e)}), 500


@bp.route("/cards", methods=["GET"])
def get_board_cards():
    """Get every card of the selected board, with its description and due date."""
    accessor = get_board_accessor()

    if accessor is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    try:
        cards = [
            {"id": card.id, "name": card.name, "desc": card.desc, "dueDate": card.due_date}
            for card in accessor.board_cards()
        ]
        return jsonify({"data": cards})
    except Exception as e:
        current_app.logger.exception("Failed to fetch board cards")
        return jsonify({"error": str(e)}), 500


@bp.route("/lists", methods=["GET"])
def query_lists():
    """Get the board's lists whose name contains a substring.

    Query params:
        - query: Substring to look for (default: every list)
        - exclude: Return the lists that do NOT contain the substring
    """
    accessor = get_board_accessor()

    if accessor is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    query = request.args.get("query", "")

    try:
        lists = accessor.query_lists(query, get_exclude_flag())
        return jsonify({"data": [board_list.model_dump(mode="json") for board_list in lists]})
    except Exception as e:
        current_app.logger.exception("Failed to query lists")
        return jsonify({"error": str(e)}), 500


@bp.route("/done/<int:sprint_number>", methods=["GET"])
def get_done_backlog(sprint_number):
    """Get the names of the cards done in a sprint."""
    accessor = get_board_accessor()

    if accessor is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    try:
        return jsonify({"data": accessor.done_product_backlog(sprint_number)})
    except Exception as e:
        current_app.logger.exception("Failed to fetch done backlog")
        return jsonify({"error": str(e)}), 500


@bp.route("/done/dates", methods=["GET"])
def get_done_dates():
    """Get created and due dates of every done card."""
    accessor = get_board_accessor()

    if accessor is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    try:
        cards = [
            {"id": card.id, "name": card.name, "createdDate": created, "dueDate": due}
            for card, created, due in accessor.features_and_tests_dates()
        ]
        return jsonify({"data": cards})
    except Exception as e:
        current_app.logger.exception("Failed to fetch done card dates")
        return jsonify({"error": str(e)}), 500
