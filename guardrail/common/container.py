"""Simple dependency wiring helpers."""
from __future__ import annotations

from functools import lru_cache

from guardrail.adapters.output.filesystem.json_file_repository import JsonFileArtifactRepository
from guardrail.adapters.output.planner.langchain_planner import LangChainTestPlanner
from guardrail.agents.common.llm_factory import build_default_llm
from guardrail.agents.planner_agent.graph import PlannerAgentRunner
from guardrail.application.handlers.convert_report_handler import ConvertReportHandler
from guardrail.application.handlers.generate_tests_handler import GenerateTestsHandler
from guardrail.application.services.guardrail_service_impl import GuardrailServiceImpl
from guardrail.common.config import get_settings
from guardrail.domain.services.finding_classifier import FindingClassifier


@lru_cache(maxsize=1)
def create_guardrail_service():
  settings = get_settings()
  repository = JsonFileArtifactRepository()

  planner = LangChainTestPlanner(llm_factory=build_default_llm)
  planner_runner = PlannerAgentRunner(planner=planner)

  generate_handler = GenerateTestsHandler(planner_runner, repository, settings)
  report_handler = ConvertReportHandler(FindingClassifier(), repository)

  return GuardrailServiceImpl(generate_handler, report_handler)
