"""WSGI entrypoint for deploying the storefront API behind Passenger or gunicorn."""

from storefront.backend.app import create_app

# Passenger looks up a module-level variable named ``application``; the
# settings come from defaults.yaml and the STOREFRONT_* environment.
application = create_app()
