"""Tests for the SARIF document builder."""
from __future__ import annotations

import json

from guardrail.domain.entities.finding import RULES, Finding, FindingLevel
from guardrail.domain.services.finding_classifier import FindingClassifier
from guardrail.domain.services.sarif_builder import SARIF_SCHEMA, TOOL_NAME, build_sarif_document


class TestBuildSarifDocument:
  def test_empty_run_still_lists_rules(self):
    document = build_sarif_document([])

    assert document['$schema'] == SARIF_SCHEMA
    assert document['version'] == '2.1.0'
    [run] = document['runs']
    assert run['results'] == []
    driver = run['tool']['driver']
    assert driver['name'] == TOOL_NAME
    assert [r['id'] for r in driver['rules']] == [rule.id for rule in RULES]
    assert driver['rules'][0] == {
      'id': 'auth.missing',
      'shortDescription': {'text': 'Missing authentication'},
      'fullDescription': {'text': 'Missing authentication'},
    }

  def test_result_shape(self):
    finding = Finding('idor.heuristic', FindingLevel.ERROR, 'IDOR on order: expected 200 to be 403', 'Orders')

    [result] = build_sarif_document([finding])['runs'][0]['results']

    assert result == {
      'ruleId': 'idor.heuristic',
      'level': 'error',
      'message': {'text': 'IDOR on order: expected 200 to be 403'},
      'locations': [{
        'physicalLocation': {
          'artifactLocation': {'uri': 'postman://Orders'},
          'region': {'startLine': 1, 'startColumn': 1},
        },
      }],
      'fingerprints': {'postmanItem': 'Orders'},
    }

  def test_document_is_json_serializable(self, newman_report):
    findings = FindingClassifier().classify_report(newman_report)
    document = build_sarif_document(findings, tool_name='custom')

    assert json.loads(json.dumps(document))['runs'][0]['tool']['driver']['name'] == 'custom'
    assert len(document['runs'][0]['results']) == 3
