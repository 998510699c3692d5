"""Credential issuing and session validation for a multi-user Flask API."""

from sessionauth.factory import create_app

__all__ = ["create_app"]
