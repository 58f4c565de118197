# settings.py
import os
from dotenv import load_dotenv

load_dotenv()

# Service
SERVICE_NAME = os.getenv("SERVICE_NAME", "internship-project-suggester")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# JSearch (RapidAPI)
RAPIDAPI_KEY = os.getenv("RAPIDAPI_KEY", "")
JSEARCH_HOST = os.getenv("JSEARCH_HOST", "jsearch.p.rapidapi.com")
JSEARCH_TIMEOUT_S = float(os.getenv("JSEARCH_TIMEOUT_S", "30"))

# Generation: "gemini" | "openai"
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "gemini").strip().lower()

GOOGLE_GEMINI_API_KEY = os.getenv("GOOGLE_GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

# Status for a generation whose output could not be parsed.
# 200 keeps it a handled outcome; set 500 for the legacy behaviour.
PARSE_FAILURE_STATUS = int(os.getenv("PARSE_FAILURE_STATUS", "200"))

# Telemetry
TELEMETRY_DB_PATH = os.getenv("TELEMETRY_DB_PATH", "telemetry.sqlite3")
