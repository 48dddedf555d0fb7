import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./equipcare.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS - comma separated list of frontend origins
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:3000,http://localhost:5173",
).split(",")

# Notes typed against a service slot that has never been saved are only echoed back
# unless this is enabled, in which case the notes edit creates the service record.
PERSIST_UNMATERIALIZED_NOTES = os.getenv("PERSIST_UNMATERIALIZED_NOTES", "false").lower() == "true"
