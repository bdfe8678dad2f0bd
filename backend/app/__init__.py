"""Flask application factory."""

import json
import os
from typing import Optional

from flask import Flask
from flask_cors import CORS
from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(__file__), "..", "config", "report-config.json"
)


class ReportConfig(BaseModel):
    """Board, repository and rate defaults read from report-config.json."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    board_name: Optional[str] = Field(None, alias="boardName")
    github_owner: Optional[str] = Field(None, alias="githubOwner")
    github_repo: Optional[str] = Field(None, alias="githubRepo")
    hourly_rate: float = Field(20, alias="hourlyRate")
    sprint_count: int = Field(1, ge=0, alias="sprintCount")


def load_report_config(app, config_path=None):
    """Load board, repository and rate defaults from the config file."""
    config_path = config_path or DEFAULT_CONFIG_PATH
    report_config = ReportConfig()

    if os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                report_config = ReportConfig.model_validate(json.load(f))
            app.logger.info(
                f"Loaded report config for board '{report_config.board_name}'"
            )
        except (json.JSONDecodeError, IOError, ValidationError) as e:
            app.logger.warning(f"Failed to load report config, using defaults: {e}")
    else:
        app.logger.info("No report-config.json found, using defaults")

    app.config["REPORT"] = report_config.model_dump(by_alias=True)


def create_app(config_path=None):
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # Enable CORS for frontend
    CORS(app, resources={
        r"/api/*": {
            "origins": ["http://localhost:5173", "http://127.0.0.1:5173"],
            "methods": ["GET", "OPTIONS"],
            "allow_headers": [
                "Content-Type",
                "X-Trello-Key", "X-Trello-Token", "X-Trello-Board",
                "X-GitHub-Token"
            ]
        }
    })

    # Register blueprints
    from app.api import boards, sprints, reports, repository
    app.register_blueprint(boards.bp)
    app.register_blueprint(sprints.bp)
    app.register_blueprint(reports.bp)
    app.register_blueprint(repository.bp)

    load_report_config(app, config_path)

    # Health check endpoint
    @app.route("/health")
    def health():
        return {"status": "ok"}

    return app
