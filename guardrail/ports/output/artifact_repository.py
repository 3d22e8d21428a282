"""Output port for reading and writing JSON artifacts."""
from __future__ import annotations

from typing import Any, Protocol


class ArtifactRepository(Protocol):
  def load(self, location: str) -> Any:
    """Read a JSON document."""
    ...

  def save(self, location: str, document: Any) -> None:
    """Write a JSON document, replacing any previous content."""
    ...
