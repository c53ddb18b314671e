# showroom/config.py
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# Credentials are checked per request by the endpoint that needs them,
# so a missing key only fails that endpoint.


class Config:
    def __init__(self):
        self.SUPABASE_URL: str = os.environ.get("SUPABASE_URL", "").rstrip("/")
        self.SUPABASE_ANON_KEY: str = os.environ.get("SUPABASE_ANON_KEY", "")
        self.OPENAI_KEY: str = os.environ.get("OPENAI_API_KEY", "")
        self.OPENAI_BASE: str = os.environ.get("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/")
        self.OPENAI_MODEL: str = os.environ.get("OPENAI_MODEL", "gpt-3.5-turbo")
        self.OPENAI_TEMPERATURE: float = float(os.environ.get("OPENAI_TEMPERATURE", "0.3"))
        self.GOOGLE_TRANSLATE_KEY: str = os.environ.get("GOOGLE_TRANSLATE_API_KEY", "")
        self.GOOGLE_TRANSLATE_URL: str = os.environ.get(
            "GOOGLE_TRANSLATE_URL", "https://translation.googleapis.com/language/translate/v2"
        )
        self.HTTP_TIMEOUT: float = float(os.environ.get("HTTP_TIMEOUT", "30"))
        self.API_URL: str = os.environ.get("SHOWROOM_API_URL", "http://127.0.0.1:8085")
        self.PREFS_PATH: Path = Path(
            os.environ.get("SHOWROOM_PREFS_PATH", str(Path.home() / ".showroom" / "prefs.json"))
        ).expanduser()
        self.LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
        log_dir = os.environ.get("LOG_DIR", "")
        self.LOG_DIR: Optional[Path] = Path(log_dir).expanduser() if log_dir else None

    @property
    def store_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)


def get_config() -> Config:
    return Config()
