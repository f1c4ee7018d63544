#!/usr/bin/env python3
"""
Main entry point for the Courtside rotation manager web API.

This script configures logging and launches the Flask-based web server.
"""
import os

from courtside.ui.web_app import run_web_app
from courtside.utils import configure_logging

if __name__ == "__main__":
    configure_logging()
    project_root = os.path.dirname(os.path.abspath(__file__))
    data_file = os.environ.get("COURTSIDE_DATA_FILE", os.path.join(project_root, "courtside_data.json"))
    run_web_app(data_file=data_file)
