"""Command object representing a run report to SARIF conversion."""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_RUN_REPORT = 'run.json'
DEFAULT_SARIF_OUTPUT = 'results.sarif'


@dataclass(frozen=True)
class ConvertReportCommand:
  report_path: str = DEFAULT_RUN_REPORT
  output_path: str = DEFAULT_SARIF_OUTPUT

  def __post_init__(self) -> None:
    if not self.report_path:
      raise ValueError('report_path is required')
    if not self.output_path:
      raise ValueError('output_path is required')
