"""Application-level run result representation."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class RunStatus(str, Enum):
  SUCCESS = 'success'
  ERROR = 'error'


@dataclass
class RunResult:
  status: RunStatus
  summary: str
  data: List[Dict[str, Any]] = field(default_factory=list)
  artifacts: Dict[str, Any] = field(default_factory=dict)
  metadata: Dict[str, Any] = field(default_factory=dict)
  execution_time: float = 0.0
  timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
  error: Optional[str] = None

  @property
  def ok(self) -> bool:
    return self.status == RunStatus.SUCCESS
