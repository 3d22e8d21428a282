"""Helpers to initialize LLM clients used by agents."""
from __future__ import annotations

from langchain_openai import ChatOpenAI

from guardrail.common.config import get_settings


def build_default_llm(temperature: float = 0.0) -> ChatOpenAI:
  """Chat model that is constrained to reply with a single JSON object."""
  settings = get_settings()
  if not settings.openai_api_key:
    raise ValueError('OPENAI_API_KEY must be set in environment or .env file')
  return ChatOpenAI(
    model=settings.model,
    temperature=temperature,
    api_key=settings.openai_api_key,
    model_kwargs={'response_format': {'type': 'json_object'}},
  )
