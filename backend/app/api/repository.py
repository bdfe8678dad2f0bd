"""GitHub repository API endpoints."""

from flask import Blueprint, Response, current_app, jsonify

from app.api.credentials import get_github_client
from services.report_renderer import render_tags

bp = Blueprint("repository", __name__, url_prefix="/api/repository")

MISSING_CREDENTIALS = "Missing GitHub credentials or repository"


@bp.route("", methods=["GET"])
def get_repository():
    """Get the project start date and its collaborators.

    Requires headers:
        - X-GitHub-Token: GitHub API token

    Query params:
        - owner, repo: Repository (default: configured githubOwner/githubRepo)
    """
    github = get_github_client()

    if github is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    try:
        meta = github.get_repo_meta()
        collaborators = github.list_collaborators()
        return jsonify({
            "data": {
                "owner": github.owner,
                "repo": github.repo,
                "startDate": meta.start_date.isoformat(),
                "collaborators": [c.model_dump(mode="json") for c in collaborators]
            }
        })
    except Exception as e:
        current_app.logger.exception("Failed to fetch repository")
        return jsonify({"error": str(e)}), 500


@bp.route("/tags", methods=["GET"])
def get_tags():
    """Get the release tags with the date of their commit, as CSV."""
    github = get_github_client()

    if github is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    try:
        csv = render_tags(github)
    except Exception as e:
        current_app.logger.exception("Failed to fetch tags")
        return jsonify({"error": str(e)}), 500

    return Response(csv, mimetype="text/csv")


@bp.route("/files/<branch>/<path:path>", methods=["GET"])
def get_file(branch, path):
    """Get the raw contents of a file on a branch."""
    github = get_github_client()

    if github is None:
        return jsonify({"error": MISSING_CREDENTIALS}), 401

    try:
        contents = github.get_file(branch, path)
    except Exception as e:
        current_app.logger.exception("Failed to fetch file")
        return jsonify({"error": str(e)}), 500

    if contents is None:
        return jsonify({"error": "File not found"}), 404

    return Response(contents, mimetype="text/plain")
