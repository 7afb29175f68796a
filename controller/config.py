"""Configuration settings for the Controller server."""

import os


CONTROLLER_HOST = os.environ.get("REPL_CONTROLLER_HOST", "0.0.0.0")

CONTROLLER_PORT = int(os.environ.get("REPL_CONTROLLER_PORT", "9200"))

CONTROLLER_RELOAD = os.environ.get("REPL_CONTROLLER_RELOAD", "false").lower() == "true"
