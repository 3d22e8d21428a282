"""Application-level configuration utilities."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MODEL = 'gpt-4o-mini'
DEFAULT_BASE_URL = 'http://localhost:8888'


@dataclass(frozen=True)
class Settings:
  """Immutable application settings loaded from environment variables."""

  openai_api_key: Optional[str] = None
  model: str = DEFAULT_MODEL
  base_url_override: Optional[str] = None
  recent_changes: Optional[str] = None
  log_level: str = 'INFO'


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Load settings from environment variables once per process."""
  env_path = Path(__file__).resolve().parents[2] / '.env'
  if env_path.exists():
    load_dotenv(env_path)
  else:
    load_dotenv()

  from os import getenv

  return Settings(
    openai_api_key=getenv('OPENAI_API_KEY') or None,
    model=getenv('GUARDRAIL_MODEL') or DEFAULT_MODEL,
    base_url_override=getenv('PR_BASEURL') or None,
    recent_changes=getenv('PR_DIFF_SUMMARY') or None,
    log_level=(getenv('GUARDRAIL_LOG_LEVEL') or 'INFO').upper(),
  )
