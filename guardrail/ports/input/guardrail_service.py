"""Input port defining the security guardrail service contract."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol

from guardrail.application.commands.convert_report_command import ConvertReportCommand
from guardrail.application.commands.generate_tests_command import GenerateTestsCommand
from guardrail.application.queries.run_result import RunResult


class GuardrailService(Protocol):
  async def generate_tests(self, command: GenerateTestsCommand) -> RunResult:
    ...

  async def convert_report(self, command: ConvertReportCommand) -> RunResult:
    ...

  async def plan_artifacts(
    self,
    collection: Mapping[str, Any],
    environment: Mapping[str, Any],
    base_url: Optional[str] = None,
    recent_changes: Optional[str] = None,
  ) -> RunResult:
    ...

  def report_to_sarif(self, report: Mapping[str, Any]) -> Dict[str, Any]:
    ...
