"""Protocols shared across application handlers."""
from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class PlannerPipeline(Protocol):
  """A compiled LangGraph pipeline that turns a base collection into PR artifacts.

  The returned state carries ``pr_collection``, ``pr_environment`` and
  ``compiled_items`` on success, or ``error`` and the failing ``step``.
  """

  async def run(self, state: Mapping[str, Any]) -> Mapping[str, Any]:
    ...
