# mlworkflow/core/config.py
import os
from pathlib import Path

from dotenv import load_dotenv, find_dotenv

# Prefer a .env next to mlworkflow/ (i.e., mlworkflow/.env)
PACKAGE_DIR = Path(__file__).resolve().parents[1]
ENV_PATH = PACKAGE_DIR / ".env"

# Use find_dotenv as a fallback (cwd) if not found at expected place
if ENV_PATH.exists():
    load_dotenv(dotenv_path=ENV_PATH, override=False)
else:
    load_dotenv(find_dotenv(filename=".env", usecwd=True), override=False)

def _get_env(name: str, default: str = "") -> str:
    v = os.getenv(name, default)
    return v.strip() if isinstance(v, str) else v

class Settings:
    # flat folder of uploaded datasets; created on first write, never at import
    UPLOAD_DIR: str = _get_env("UPLOAD_DIR", os.path.join(os.getcwd(), "uploads"))
    MAX_UPLOAD_BYTES: int = int(_get_env("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
    UPLOAD_CHUNK_BYTES: int = int(_get_env("UPLOAD_CHUNK_BYTES", str(1024 * 1024)))

    CORS_ORIGINS: list[str] = [o.strip() for o in _get_env("CORS_ORIGINS", "*").split(",") if o.strip()]

    LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO").upper()
    LOG_FILE: str = _get_env("LOG_FILE", "")

    # client side
    API_BASE_URL: str = _get_env("API_BASE_URL", "http://127.0.0.1:8000")
    HANDOFF_DELAY_SECONDS: float = float(_get_env("HANDOFF_DELAY_SECONDS", "2.0"))

settings = Settings()
