"""Domain service that renders the security test planning prompt."""
from __future__ import annotations

import json
import re
from typing import Iterable, Mapping, Optional

from guardrail.domain.entities.endpoint_descriptor import EndpointDescriptor

DEFAULT_POLICY = 'Block on High; warn on Medium/Low.'
NO_RECENT_CHANGES = '(none)'

API_SUMMARY = '__API_SUMMARY__'
BASE_URL = '__BASE_URL__'
POLICY = '__POLICY__'
RECENT_CHANGES = '__RECENT_CHANGES__'

KNOWN_MARKERS = (API_SUMMARY, BASE_URL, POLICY, RECENT_CHANGES)

_MARKER = re.compile(r'__[A-Z][A-Z_]*[A-Z]__')

PLANNER_PROMPT_TEMPLATE = '''You are an API security engineer. Plan a SMALL set of targeted, CI-safe security
tests for the API described below, mapped to the OWASP API Security Top 10 (2023).

Categories:
- API1:2023 Broken Object Level Authorization (BOLA/IDOR)
- API2:2023 Broken Authentication
- API3:2023 Broken Object Property Level Authorization (BOPLA / mass assignment, excessive data exposure)
- API4:2023 Unrestricted Resource Consumption
- API5:2023 Broken Function Level Authorization (BFLA)
- API6:2023 Unrestricted Access to Sensitive Business Flows
- API7:2023 Server Side Request Forgery (SSRF)
- API8:2023 Security Misconfiguration
- API9:2023 Improper Inventory Management
- API10:2023 Unsafe Consumption of APIs

Priorities:
1. API1, API5, API3 and API2 come first: object ownership, role boundaries, writable
   properties and missing or expired credentials.
2. Then API8 (security headers such as Cache-Control: no-store on sensitive GETs),
   API4 and API6.
3. API7, API9 and API10 only when an endpoint clearly accepts URLs, exposes versions or
   proxies third-party data.
4. Endpoints touched by the recent changes get tested before everything else.

Base URL: __BASE_URL__
Policy: __POLICY__
Recent changes: __RECENT_CHANGES__

Endpoints (JSON, "{}" marks a path variable):
__API_SUMMARY__

Output: a single JSON object and nothing else, with this exact shape:
{
  "tests": [
    {
      "name": "short human readable name",
      "owasp": "API1:2023",
      "risk": "high | medium | low",
      "request": {
        "method": "GET | POST | PUT | PATCH | DELETE",
        "path": "/path/with/concrete/values",
        "auth": "none | user | admin | expired",
        "headers": [{"key": "Authorization", "value": "Bearer {{user_token}}"}],
        "body": {}
      },
      "assertions": [
        {"type": "status", "op": "eq | not", "value": 403},
        {"type": "headerContains", "key": "Cache-Control", "value": "no-store"},
        {"type": "jsonPath", "path": "data.role", "op": "exists | eq | notEq | notContains", "value": "admin"}
      ],
      "notes": "why this test matters"
    }
  ]
}

Rules:
- Generate between 3 and 12 tests.
- Never include real secrets. Use only the placeholders {{user_token}}, {{admin_token}} and
  {{expired_token}} for credentials.
- Name tests so the failure is obvious, e.g. "no-auth access to orders", "IDOR on order",
  "mass assignment of role", "cache-control on profile".
- SSRF tests must be inert: only check that URL-like inputs pointing at a public
  documentation host are rejected or ignored. Never target internal networks, cloud metadata
  addresses or localhost.
- Business flow tests only check that a sensitive flow demands the right role; they never
  complete the flow.
- Rate limit tests send at most 5 requests and only assert on the response of the last one.
- Do not generate destructive requests against collection-level resources (no bulk DELETE).
'''


class PromptInjectionError(ValueError):
  """Raised when a substitution marker survives rendering."""


class PlanRenderer:
  """Substitutes the planner inputs into the prompt template in a single pass."""

  def __init__(self, template: str = PLANNER_PROMPT_TEMPLATE) -> None:
    if '${' in template:
      raise ValueError("Planner prompt contains '${'; use __NAME__ markers instead.")
    unknown = sorted(set(_MARKER.findall(template)) - set(KNOWN_MARKERS))
    if unknown:
      raise ValueError(f'Planner prompt uses unknown markers: {", ".join(unknown)}')
    self._template = template

  def render(
    self,
    endpoints: Iterable[EndpointDescriptor],
    base_url: str,
    policy: str = DEFAULT_POLICY,
    recent_changes: Optional[str] = None,
  ) -> str:
    values: Mapping[str, str] = {
      API_SUMMARY: json.dumps([e.as_dict() for e in endpoints], indent=2, ensure_ascii=False),
      BASE_URL: base_url,
      POLICY: policy,
      RECENT_CHANGES: recent_changes or NO_RECENT_CHANGES,
    }
    pattern = re.compile('|'.join(re.escape(marker) for marker in KNOWN_MARKERS))
    prompt = pattern.sub(lambda match: values[match.group(0)], self._template)

    leftover = [marker for marker in KNOWN_MARKERS if marker in prompt]
    if leftover:
      raise PromptInjectionError(
        f'Rendered planner prompt still contains {", ".join(leftover)}; refusing to dispatch.'
      )
    return prompt
