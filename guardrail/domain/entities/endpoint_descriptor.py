"""Domain entity describing one endpoint of a Postman collection."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class EndpointDescriptor:
  """Compact endpoint view handed to the test planner."""

  name: str
  folder: Tuple[str, ...]
  method: str
  path: str
  has_auth_header: bool = False
  path_params: Tuple[str, ...] = ()

  def identifier(self) -> str:
    return f'{self.method} {self.path}'

  def as_dict(self) -> dict:
    """Serialize with the field names the planner prompt documents."""
    return {
      'name': self.name,
      'folder': ' / '.join(self.folder),
      'method': self.method,
      'path': self.path,
      'hasAuthHeader': self.has_auth_header,
      'pathParams': list(self.path_params),
    }
