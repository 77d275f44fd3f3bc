import os
from dotenv import load_dotenv

load_dotenv()

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", 8000))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

# Pacing between URLs (seconds). Only there to make the demo feel realistic.
SCRAPE_DELAY_MIN = float(os.environ.get("SCRAPE_DELAY_MIN", 1.0))
SCRAPE_DELAY_MAX = float(os.environ.get("SCRAPE_DELAY_MAX", 3.0))
DISCOVERY_DELAY = float(os.environ.get("DISCOVERY_DELAY", 0.5))

HEADLESS = os.environ.get("HEADLESS", "true").lower() not in ("0", "false", "no")
USER_AGENT = os.environ.get(
    "USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)
