"""Filesystem implementation of the artifact repository port."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from guardrail.ports.output.artifact_repository import ArtifactRepository

logger = logging.getLogger(__name__)


class JsonFileArtifactRepository(ArtifactRepository):
  """Reads and writes UTF-8 JSON files relative to a root directory."""

  def __init__(self, root: str | Path = '.') -> None:
    self._root = Path(root)

  def load(self, location: str) -> Any:
    path = self._resolve(location)
    with path.open('r', encoding='utf-8') as handle:
      return json.load(handle)

  def save(self, location: str, document: Any) -> None:
    path = self._resolve(location)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding='utf-8')
    logger.debug('Wrote %s', path)

  def _resolve(self, location: str) -> Path:
    path = Path(location)
    return path if path.is_absolute() else self._root / path
