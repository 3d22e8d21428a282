"""Input port for formatting run results."""
from __future__ import annotations

from typing import Any, Protocol

from guardrail.application.queries.run_result import RunResult


class ResultPresenter(Protocol):
  def present(self, result: RunResult) -> Any:
    ...

  def present_error(self, error: Exception) -> Any:
    ...
