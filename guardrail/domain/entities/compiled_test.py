"""Domain entity for an executable Postman test item."""
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class CompiledTestItem:
  """A request definition plus the assertion script run after the response."""

  __test__ = False

  name: str
  method: str
  url: str
  headers: Tuple[Dict[str, Any], ...] = ()
  raw_body: Optional[str] = None
  script: Tuple[str, ...] = ()
  description: str = ''

  def to_postman_item(self) -> Dict[str, Any]:
    """Build a fresh Postman v2.1 item; callers may mutate the result."""
    request: Dict[str, Any] = {
      'method': self.method,
      'url': {'raw': self.url},
      'header': copy.deepcopy(list(self.headers)),
    }
    if self.raw_body is not None:
      request['body'] = {
        'mode': 'raw',
        'raw': self.raw_body,
        'options': {'raw': {'language': 'json'}},
      }
    if self.description:
      request['description'] = self.description

    return {
      'name': self.name,
      'request': request,
      'event': [{
        'listen': 'test',
        'script': {'type': 'text/javascript', 'exec': list(self.script)},
      }],
    }
