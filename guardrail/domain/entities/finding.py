"""Domain entities for classified security findings."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


class FindingLevel(str, Enum):
  ERROR = 'error'
  WARNING = 'warning'
  NOTE = 'note'


@dataclass(frozen=True)
class Rule:
  id: str
  short_description: str


AUTH_MISSING = 'auth.missing'
IDOR_HEURISTIC = 'idor.heuristic'
MASS_ASSIGNMENT_PROBE = 'mass_assignment.probe'
CACHE_CONTROL_MISSING = 'cache_control.missing_sensitive_get'
SECURITY_TEST = 'security.test'

RULES: Tuple[Rule, ...] = (
  Rule(AUTH_MISSING, 'Missing authentication'),
  Rule(IDOR_HEURISTIC, 'Insecure Direct Object Reference'),
  Rule(MASS_ASSIGNMENT_PROBE, 'Mass assignment accepted'),
  Rule(CACHE_CONTROL_MISSING, 'Missing Cache-Control no-store'),
  Rule(SECURITY_TEST, 'Security test failed'),
)

RULES_BY_ID: Mapping[str, Rule] = MappingProxyType({rule.id: rule for rule in RULES})


@dataclass(frozen=True)
class FailedAssertionRecord:
  """A failed assertion lifted out of a newman run report."""

  item_name: str
  assertion_name: str
  error_message: str


@dataclass(frozen=True)
class Finding:
  rule_id: str
  level: FindingLevel
  message: str
  item_name: str

  @property
  def location_uri(self) -> str:
    return f'postman://{self.item_name}'

  @property
  def fingerprint(self) -> str:
    return self.item_name
