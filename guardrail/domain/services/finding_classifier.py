"""Domain service that maps failed newman assertions onto security rules."""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Tuple

from guardrail.domain.entities.finding import (
  AUTH_MISSING,
  CACHE_CONTROL_MISSING,
  IDOR_HEURISTIC,
  MASS_ASSIGNMENT_PROBE,
  SECURITY_TEST,
  FailedAssertionRecord,
  Finding,
  FindingLevel,
)

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = 'assertion failed'
UNKNOWN_ITEM = 'unknown'


def _contains_any(*keywords: str) -> Callable[[str], bool]:
  return lambda name: any(keyword in name for keyword in keywords)


# Evaluated top to bottom against the lower-cased assertion name.
RULE_CHAIN: Tuple[Tuple[Callable[[str], bool], str], ...] = (
  (_contains_any('no-auth', 'no auth'), AUTH_MISSING),
  (_contains_any('idor'), IDOR_HEURISTIC),
  (_contains_any('mass'), MASS_ASSIGNMENT_PROBE),
  (_contains_any('cache-control'), CACHE_CONTROL_MISSING),
)

RULE_LEVELS = {
  AUTH_MISSING: FindingLevel.ERROR,
  IDOR_HEURISTIC: FindingLevel.ERROR,
  MASS_ASSIGNMENT_PROBE: FindingLevel.WARNING,
}


def classify_rule(assertion_name: str) -> str:
  name = (assertion_name or '').lower()
  for matches, rule_id in RULE_CHAIN:
    if matches(name):
      return rule_id
  return SECURITY_TEST


def level_for(rule_id: str) -> FindingLevel:
  return RULE_LEVELS.get(rule_id, FindingLevel.NOTE)


def _list(value: Any) -> list:
  return value if isinstance(value, list) else []


def extract_failed_assertions(report: Mapping[str, Any]) -> List[FailedAssertionRecord]:
  """Collect every assertion carrying an ``error`` from a newman JSON report."""
  run = report.get('run') if isinstance(report, Mapping) else None
  executions = _list(run.get('executions')) if isinstance(run, Mapping) else []

  records: List[FailedAssertionRecord] = []
  for execution in executions:
    if not isinstance(execution, Mapping):
      continue
    item = execution.get('item') if isinstance(execution.get('item'), Mapping) else {}
    item_name = str(item.get('name') or UNKNOWN_ITEM)
    for assertion in _list(execution.get('assertions')):
      if not isinstance(assertion, Mapping) or assertion.get('error') is None:
        continue
      error = assertion['error']
      message = error.get('message') if isinstance(error, Mapping) else None
      records.append(FailedAssertionRecord(
        item_name=item_name,
        assertion_name=str(assertion.get('assertion') or ''),
        error_message=str(message or DEFAULT_ERROR_MESSAGE),
      ))
  return records


class FindingClassifier:
  """Turns a newman run report into one finding per failed assertion."""

  def classify(self, record: FailedAssertionRecord) -> Finding:
    rule_id = classify_rule(record.assertion_name)
    return Finding(
      rule_id=rule_id,
      level=level_for(rule_id),
      message=f'{record.assertion_name}: {record.error_message}',
      item_name=record.item_name,
    )

  def classify_report(self, report: Mapping[str, Any]) -> List[Finding]:
    findings = [self.classify(record) for record in extract_failed_assertions(report)]
    logger.info('Classified %d failed assertions', len(findings))
    return findings
