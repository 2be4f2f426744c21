# settings.py
import os
from dotenv import load_dotenv

load_dotenv()

# OpenAI (optional: without a key the flow runs on synthesized content)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_QUESTIONS_MODEL = os.getenv("OPENAI_QUESTIONS_MODEL", "gpt-4o-mini")
OPENAI_NARRATIVE_MODEL = os.getenv("OPENAI_NARRATIVE_MODEL", "gpt-4o")
OPENAI_TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", "30"))

# Remote generation endpoint (takes precedence over OpenAI when set)
GENERATION_SERVICE_URL = os.getenv("GENERATION_SERVICE_URL")
GENERATION_HTTP_TIMEOUT = float(os.getenv("GENERATION_HTTP_TIMEOUT", "30"))

# Retry schedule
QUESTIONS_MAX_RETRIES = int(os.getenv("QUESTIONS_MAX_RETRIES", "3"))
NARRATIVE_MAX_RETRIES = int(os.getenv("NARRATIVE_MAX_RETRIES", "2"))
RETRY_BASE_DELAY = float(os.getenv("RETRY_BASE_DELAY", "1.0"))
RETRY_MAX_DELAY = float(os.getenv("RETRY_MAX_DELAY", "30.0"))

# What happens once the retry budget is spent: "fallback" | "raise"
ON_EXHAUSTED = os.getenv("ON_EXHAUSTED", "fallback").strip().lower()

if ON_EXHAUSTED not in {"fallback", "raise"}:
    raise RuntimeError(f"Invalid ON_EXHAUSTED value: {ON_EXHAUSTED!r}")

# Telemetry
TELEMETRY_DB = os.getenv("TELEMETRY_DB", "telemetry.sqlite3")

# App
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "500"))
CTA_URL = os.getenv("CTA_URL", "https://devote.example/walkthrough")
DEBUG = os.getenv("DEBUG", "0").strip() == "1"
