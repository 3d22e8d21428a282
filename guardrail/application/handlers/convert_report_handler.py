"""Application handler that converts newman run reports into SARIF."""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Mapping, Tuple

from guardrail.application.commands.convert_report_command import ConvertReportCommand
from guardrail.application.queries.run_result import RunResult, RunStatus
from guardrail.domain.entities.finding import Finding
from guardrail.domain.services.finding_classifier import FindingClassifier
from guardrail.domain.services.sarif_builder import build_sarif_document
from guardrail.ports.output.artifact_repository import ArtifactRepository

logger = logging.getLogger(__name__)


class ConvertReportHandler:
  def __init__(self, classifier: FindingClassifier, repository: ArtifactRepository):
    self._classifier = classifier
    self._repository = repository

  async def handle(self, command: ConvertReportCommand) -> RunResult:
    start = time.perf_counter()
    try:
      report = self._repository.load(command.report_path)
      findings, document = self.to_sarif(report)
      self._repository.save(command.output_path, document)

      return RunResult(
        status=RunStatus.SUCCESS,
        summary=f'Wrote {len(findings)} findings to {command.output_path}',
        data=[self._finding_row(finding) for finding in findings],
        metadata={
          'findings': len(findings),
          'report_path': command.report_path,
          'sarif_path': command.output_path,
        },
        execution_time=time.perf_counter() - start,
      )
    except Exception as exc:  # noqa: BLE001
      logger.exception('Run report conversion failed')
      return RunResult(
        status=RunStatus.ERROR,
        summary='',
        execution_time=time.perf_counter() - start,
        error=str(exc),
      )

  def to_sarif(self, report: Mapping[str, Any]) -> Tuple[List[Finding], Dict[str, Any]]:
    findings = self._classifier.classify_report(report)
    return findings, build_sarif_document(findings)

  @staticmethod
  def _finding_row(finding: Finding) -> Dict[str, Any]:
    return {
      'rule_id': finding.rule_id,
      'level': finding.level.value,
      'message': finding.message,
      'item': finding.item_name,
    }
