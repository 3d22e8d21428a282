"""Implementation of the guardrail service port."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from guardrail.application.commands.convert_report_command import ConvertReportCommand
from guardrail.application.commands.generate_tests_command import GenerateTestsCommand
from guardrail.application.handlers.convert_report_handler import ConvertReportHandler
from guardrail.application.handlers.generate_tests_handler import GenerateTestsHandler
from guardrail.application.queries.run_result import RunResult
from guardrail.ports.input.guardrail_service import GuardrailService


class GuardrailServiceImpl(GuardrailService):
  """Concrete implementation that delegates to the appropriate handler."""

  def __init__(
    self,
    generate_handler: GenerateTestsHandler,
    report_handler: ConvertReportHandler,
  ) -> None:
    self._generate_handler = generate_handler
    self._report_handler = report_handler

  async def generate_tests(self, command: GenerateTestsCommand) -> RunResult:
    return await self._generate_handler.handle(command)

  async def convert_report(self, command: ConvertReportCommand) -> RunResult:
    return await self._report_handler.handle(command)

  async def plan_artifacts(
    self,
    collection: Mapping[str, Any],
    environment: Mapping[str, Any],
    base_url: Optional[str] = None,
    recent_changes: Optional[str] = None,
  ) -> RunResult:
    return await self._generate_handler.plan(collection, environment, base_url, recent_changes)

  def report_to_sarif(self, report: Mapping[str, Any]) -> Dict[str, Any]:
    _, document = self._report_handler.to_sarif(report)
    return document
