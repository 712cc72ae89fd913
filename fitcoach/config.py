from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional


def _optional_int(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    return int(raw)


class Settings:
    """Centralized configuration for the coaching backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("FITCOACH_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("FITCOACH_DB_PATH") or (self.data_root / "fitcoach.db")
        ).expanduser()
        # In production you MUST set FITCOACH_JWT_SECRET.
        self.jwt_secret: str = os.environ.get("FITCOACH_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("FITCOACH_TOKEN_TTL_DAYS") or "7")
        self.cookie_secure: bool = (os.environ.get("FITCOACH_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}
        self.admin_emails: List[str] = [
            email.strip().lower()
            for email in (os.environ.get("FITCOACH_ADMIN_EMAILS") or "").split(",")
            if email.strip()
        ]

        # ---- Generative AI collaborator (OpenAI-compatible) ----
        self.genai_api_key: str | None = os.environ.get("FITCOACH_GENAI_API_KEY") or None
        self.genai_base_url: str = os.environ.get(
            "FITCOACH_GENAI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai"
        )
        self.genai_text_model: str = os.environ.get("FITCOACH_GENAI_TEXT_MODEL", "gemini-2.5-flash")
        self.genai_vision_model: str = os.environ.get("FITCOACH_GENAI_VISION_MODEL", "gemini-2.5-flash")
        timeout_raw = (os.environ.get("FITCOACH_GENAI_TIMEOUT") or "").strip()
        # Unset means the request blocks until the collaborator answers.
        self.genai_timeout: float | None = float(timeout_raw) if timeout_raw else None
        self.genai_temperature: float = float(os.environ.get("FITCOACH_GENAI_TEMPERATURE") or "0.4")

        # ---- Coaching rules ----
        self.protein_target_g: float = float(os.environ.get("FITCOACH_PROTEIN_TARGET_G") or "30")
        self.meal_scan_limits: dict[str, Optional[int]] = {
            "free": 0,
            "pro": _optional_int(os.environ.get("FITCOACH_MEAL_SCAN_LIMIT_PRO", "30")),
            "elite": _optional_int(os.environ.get("FITCOACH_MEAL_SCAN_LIMIT_ELITE")),
        }
        self.max_image_bytes: int = int(os.environ.get("FITCOACH_MAX_IMAGE_BYTES") or "5000000")

        cors = os.environ.get("FITCOACH_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
