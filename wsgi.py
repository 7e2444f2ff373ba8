"""
WSGI entrypoint for Gunicorn and serverless hosts.

    gunicorn wsgi:app
"""

from app import configure_logging, create_app

configure_logging()
app = create_app()
