"""State definition for the security test planner LangGraph pipeline."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, TypedDict

from guardrail.domain.entities.compiled_test import CompiledTestItem
from guardrail.domain.entities.endpoint_descriptor import EndpointDescriptor


class PlannerAgentState(TypedDict, total=False):
  # Input fields
  base_collection: Dict[str, Any]
  base_environment: Dict[str, Any]
  base_url: str
  policy: str
  recent_changes: Optional[str]

  # Planning
  endpoints: List[EndpointDescriptor]
  prompt: str
  planned_tests: List[Dict[str, Any]]

  # Artifacts
  compiled_items: List[CompiledTestItem]
  pr_collection: Dict[str, Any]
  pr_environment: Dict[str, Any]

  # Status tracking
  error: Optional[str]
  step: str
