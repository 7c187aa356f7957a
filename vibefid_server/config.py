# Runtime settings, read once from the environment.
import os
from pathlib import Path

ENV = os.getenv("ENV", "dev")

DB_PATH = Path(os.getenv("VIBEFID_DB_PATH", "db/vibefid.db"))
LOG_DIR = Path(os.getenv("VIBEFID_LOG_DIR", "logs"))
LOG_LEVEL = os.getenv("VIBEFID_LOG_LEVEL", "DEBUG").upper()

# one mint request per wallet address per window
MINT_RATE_LIMIT_MS = int(os.getenv("VIBEFID_MINT_RATE_LIMIT_MS", "10000"))

PUBLIC_BASE_URL = os.getenv("VIBEFID_PUBLIC_URL", "https://www.vibefid.xyz")
API_URL = os.getenv("VIBEFID_API_URL", "http://127.0.0.1:8000")
