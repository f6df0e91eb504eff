"""Blueprint registrations for application routes."""

from flask import Flask

from .auth import blueprint as auth_blueprint
from .category import blueprint as category_blueprint
from .product import blueprint as product_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(auth_blueprint)
    app.register_blueprint(category_blueprint)
    app.register_blueprint(product_blueprint)
