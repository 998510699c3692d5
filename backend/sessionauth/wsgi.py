"""WSGI entry point (``gunicorn sessionauth.wsgi:app``)."""

from sessionauth import create_app

app = create_app()
