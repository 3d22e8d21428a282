"""Markdown presenter for pull request comments and job summaries."""
from __future__ import annotations

from guardrail.application.queries.run_result import RunResult
from guardrail.ports.input.result_presenter import ResultPresenter


def _cell(value: object) -> str:
  return str(value).replace('|', '\\|').replace('\n', ' ')


class MarkdownPresenter(ResultPresenter):
  def present(self, result: RunResult) -> str:
    lines = [
      '# API Security Guardrail',
      '',
      f'**Status:** {result.status.value}',
      f'**Execution time:** {result.execution_time:.2f}s',
      '',
    ]

    if result.error:
      lines.extend([f'**Error:** {result.error}', ''])
      return '\n'.join(lines)

    lines.extend([result.summary, ''])

    if result.data and 'rule_id' in result.data[0]:
      lines.append('| Level | Rule | Item | Message |')
      lines.append('| --- | --- | --- | --- |')
      for row in result.data:
        lines.append(
          f"| {row['level']} | {row['rule_id']} | {_cell(row['item'])} | {_cell(row['message'])} |"
        )
      lines.append('')
    elif result.data:
      lines.append('| Test | Request | Checks |')
      lines.append('| --- | --- | --- |')
      for row in result.data:
        lines.append(f"| {_cell(row['name'])} | `{row['method']} {row['url']}` | {row['checks']} |")
      lines.append('')

    if result.metadata:
      lines.append('## Metadata')
      for key, value in result.metadata.items():
        lines.append(f'- **{key}**: {value}')

    return '\n'.join(lines)

  def present_error(self, error: Exception) -> str:
    return f'# Error\n\n{error}'
