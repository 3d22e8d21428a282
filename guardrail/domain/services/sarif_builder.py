"""Domain service that renders findings as a SARIF 2.1.0 document."""
from __future__ import annotations

from typing import Any, Dict, Iterable

from guardrail.domain.entities.finding import RULES, Finding

SARIF_SCHEMA = 'https://json.schemastore.org/sarif-2.1.0.json'
SARIF_VERSION = '2.1.0'
TOOL_NAME = 'api-security-guardrail'


def build_sarif_document(findings: Iterable[Finding], tool_name: str = TOOL_NAME) -> Dict[str, Any]:
  """Wrap findings in a single-run SARIF log listing every known rule."""
  return {
    '$schema': SARIF_SCHEMA,
    'version': SARIF_VERSION,
    'runs': [{
      'tool': {
        'driver': {
          'name': tool_name,
          'rules': [
            {
              'id': rule.id,
              'shortDescription': {'text': rule.short_description},
              'fullDescription': {'text': rule.short_description},
            }
            for rule in RULES
          ],
        },
      },
      'results': [_result(finding) for finding in findings],
    }],
  }


def _result(finding: Finding) -> Dict[str, Any]:
  return {
    'ruleId': finding.rule_id,
    'level': finding.level.value,
    'message': {'text': finding.message},
    'locations': [{
      'physicalLocation': {
        'artifactLocation': {'uri': finding.location_uri},
        'region': {'startLine': 1, 'startColumn': 1},
      },
    }],
    'fingerprints': {'postmanItem': finding.fingerprint},
  }
