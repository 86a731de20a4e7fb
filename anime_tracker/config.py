import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./anime_tracker.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

# SECRET_KEY is read at call time by utils.token_utils and has no default.
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "4320"))  # 3 days

CATALOG_BASE_URL = os.getenv("CATALOG_BASE_URL", "https://api.jikan.moe/v4").rstrip("/")
CATALOG_TIMEOUT = float(os.getenv("CATALOG_TIMEOUT", "10"))

PUBLIC_DIR = Path(
    os.getenv("PUBLIC_DIR", str(Path(__file__).resolve().parent.parent / "public"))
)

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "*").split(",")
    if o.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
