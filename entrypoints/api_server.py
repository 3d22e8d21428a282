"""API server entrypoint."""
from __future__ import annotations

import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import uvicorn

from guardrail.adapters.input.api.fastapi_adapter import FastAPIAdapter
from guardrail.common.container import create_guardrail_service


def get_app():
  return FastAPIAdapter(create_guardrail_service()).app


def main() -> None:
  uvicorn.run(get_app(), host='0.0.0.0', port=8000)


if __name__ == '__main__':
  main()
