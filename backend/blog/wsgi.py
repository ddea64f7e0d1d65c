"""WSGI entry point for gunicorn (``blog.wsgi:app``)."""

from blog import create_app

app = create_app()
