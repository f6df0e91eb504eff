"""Application factory for the storefront REST API."""

from __future__ import annotations

import logging
from warnings import warn

import click
from flask import Flask, jsonify
from flask_cors import CORS
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from storefront.backend.config.settings import StorefrontSettings, load_settings
from storefront.backend.version import get_project_version

from .http import ServiceError, problem_response
from .models import format_validation_error
from .services import EXTENSION_KEY, StorefrontServices
from .services.auth_service import USERS

logger = logging.getLogger(__name__)


def create_app(
    settings: StorefrontSettings | None = None,
    services: StorefrontServices | None = None,
) -> Flask:
    """Create and configure the Flask application instance."""

    # Blueprints resolve their services through the app, so import them late.
    from .routes import register_routes

    settings = settings or load_settings()

    app = Flask(__name__)
    app.config.update(SECRET_KEY=settings.secret_key)

    if not settings.allowed_origins:
        warn(
            "No allowed origins configured; cross-origin requests will be rejected.",
            stacklevel=1,
        )

    CORS(
        app,
        resources={r"/api/*": {"origins": sorted(settings.allowed_origins)}},
        supports_credentials=False,
        methods=["GET", "OPTIONS", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.extensions[EXTENSION_KEY] = services or StorefrontServices.from_settings(settings)

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        return jsonify({"status": "ok", "version": get_project_version()})

    @app.errorhandler(ServiceError)
    def handle_service_error(error: ServiceError):
        """Render domain failures with the shared ``success: false`` envelope."""

        return error.to_problem().to_response()

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(ValidationError)
    def handle_validation_error(error: ValidationError):
        return problem_response(
            "validation_error", status=400, message=format_validation_error(error)
        ).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        """Gracefully surface domain validation errors to clients."""

        return problem_response(
            "validation_error", status=400, message=str(error)
        ).to_response()

    @app.cli.command("promote-admin")
    @click.argument("email")
    def promote_admin(email: str) -> None:
        """Grant the admin role to the account registered with EMAIL."""

        service_bundle: StorefrontServices = app.extensions[EXTENSION_KEY]
        user = service_bundle.store.find_one(USERS, {"email": email.strip().lower()})
        if user is None:
            raise click.ClickException(f"No user registered with {email}")
        service_bundle.auth.promote_to_admin(user["_id"])
        logger.info("Promoted %s to admin", user["_id"])
        click.echo(f"{email} is now an admin")

    return app
