"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


SERVICE_VERSION: str = "1.0.0"

# Model service – never hardcode keys
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
MODEL_NAME: str = os.getenv("MODEL_NAME", "gpt-4o-mini")
LLM_TEMPERATURE: float = 0.1  # Low temperature for consistent extraction
LLM_MAX_TOKENS: int = 2048
LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

# Pipeline defaults (overridable per call through ExtractionOptions)
DEFAULT_LANGUAGE: str = os.getenv("DEFAULT_LANGUAGE", "en")
FLEXIBLE_VALIDATION_DEFAULT: bool = _env_bool("FLEXIBLE_VALIDATION", True)
STRICT_VALIDATION_DEFAULT: bool = _env_bool("STRICT_VALIDATION", False)
USE_FALLBACK_DEFAULT: bool = _env_bool("USE_FALLBACK", True)
DETECT_FORMAT_DEFAULT: bool = _env_bool("DETECT_FORMAT", True)
INCLUDE_UNMAPPED_DEFAULT: bool = _env_bool("INCLUDE_UNMAPPED", True)

# Input limits
MIN_RESUME_CHARS: int = 50
MAX_RESUME_CHARS: int = 50000
PROMPT_MAX_RESUME_CHARS: int = 12000

# Concurrency
BATCH_CONCURRENCY: int = 5  # Max concurrent resume pipelines per batch
BATCH_MAX_SIZE: int = 50

# Coarse throttling (fixed window per client)
RATE_LIMIT_MAX_REQUESTS: int = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "100"))
RATE_LIMIT_WINDOW_SECONDS: float = float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))

# Document conversion: "local" (pdfplumber / python-docx) or "pdfco" (remote service)
DOCUMENT_CONVERTER: str = os.getenv("DOCUMENT_CONVERTER", "local").strip().lower()
PDF_CO_API_KEY: str = os.getenv("PDF_CO_API_KEY", "")
PDF_CO_BASE_URL: str = os.getenv("PDF_CO_BASE_URL", "https://api.pdf.co/v1")
PDF_CO_PAGES: str = "1-10"
HTTP_TIMEOUT_SECONDS: float = 30.0
