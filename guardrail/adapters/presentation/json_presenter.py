"""JSON presenter implementation."""
from __future__ import annotations

import json

from guardrail.application.queries.run_result import RunResult
from guardrail.ports.input.result_presenter import ResultPresenter


class JsonPresenter(ResultPresenter):
  def present(self, result: RunResult) -> str:
    payload = {
      'status': result.status.value,
      'summary': result.summary,
      'data': result.data,
      'metadata': result.metadata,
      'execution_time': result.execution_time,
      'timestamp': result.timestamp.isoformat(),
      'error': result.error,
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)

  def present_error(self, error: Exception) -> str:
    return json.dumps({'status': 'error', 'error': str(error)}, ensure_ascii=False, indent=2)
