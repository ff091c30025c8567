"""
config.py — Runtime settings
============================
Values come from the environment, after loading a .env file from the
current directory if there is one. Copy .env.example to .env to override.
"""

import os

from dotenv import load_dotenv

load_dotenv()

SERVER_NAME = os.getenv("PORTAL_SERVER_NAME", "ticket-portal")
HOST = os.getenv("PORTAL_HOST", "0.0.0.0")
PORT = int(os.getenv("PORTAL_PORT", "8001"))
SERVER_URL = os.getenv("PORTAL_SERVER_URL", f"http://localhost:{PORT}/mcp")
LOG_LEVEL = os.getenv("PORTAL_LOG_LEVEL", "INFO").upper()
