"""Plain text presenter for console runs."""
from __future__ import annotations

from guardrail.application.queries.run_result import RunResult
from guardrail.ports.input.result_presenter import ResultPresenter


class TextPresenter(ResultPresenter):
  def present(self, result: RunResult) -> str:
    if not result.ok:
      return self.present_error(RuntimeError(result.error or 'run failed'))

    lines = [f'\u2705 {result.summary}']
    for row in result.data:
      if 'rule_id' in row:
        lines.append(f"  - [{row['level']}] {row['rule_id']}: {row['message']} ({row['item']})")
      else:
        lines.append(f"  - {row['name']} ({row['method']} {row['url']}, {row['checks']} checks)")
    lines.append(f'Execution time: {result.execution_time:.2f}s')
    return '\n'.join(lines)

  def present_error(self, error: Exception) -> str:
    return f'ERROR: {error}'
