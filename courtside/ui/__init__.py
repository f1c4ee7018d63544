"""
UI package for the Courtside rotation manager.

This package contains the Flask JSON API used by the bench client.
"""
from .web_app import create_app, run_web_app

__all__ = ["create_app", "run_web_app"]
