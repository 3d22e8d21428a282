"""CLI entrypoint for the API security guardrail."""
from __future__ import annotations

import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from guardrail.adapters.input.cli.cli_adapter import CLIAdapter
from guardrail.common.container import create_guardrail_service


def main() -> None:
  CLIAdapter(create_guardrail_service()).run()


if __name__ == '__main__':
  main()
