"""Application handler for security test generation runs."""
from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional

from guardrail.application.commands.generate_tests_command import GenerateTestsCommand
from guardrail.application.handlers.protocols import PlannerPipeline
from guardrail.application.queries.run_result import RunResult, RunStatus
from guardrail.common.config import DEFAULT_BASE_URL, Settings
from guardrail.domain.services.collection_merger import BASE_URL_KEY, environment_value
from guardrail.ports.output.artifact_repository import ArtifactRepository

logger = logging.getLogger(__name__)


class GenerateTestsHandler:
  """Coordinates a planning run executed by the LangGraph planner pipeline.

  Loads the base artifacts, resolves the target base URL, runs the pipeline
  and writes the PR-scoped collection and environment. Nothing is written
  when the pipeline reports an error.
  """

  def __init__(
    self,
    pipeline: PlannerPipeline,
    repository: ArtifactRepository,
    settings: Settings,
  ):
    self._pipeline = pipeline
    self._repository = repository
    self._settings = settings

  async def handle(self, command: GenerateTestsCommand) -> RunResult:
    start = time.perf_counter()
    try:
      collection = self._load_object(command.collection_path, 'collection')
      environment = self._load_object(command.environment_path, 'environment')

      result = await self.plan(collection, environment, command.base_url, command.recent_changes)
      if result.ok:
        self._repository.save(command.output_collection_path, result.artifacts['collection'])
        self._repository.save(command.output_environment_path, result.artifacts['environment'])
        result.metadata['collection_path'] = command.output_collection_path
        result.metadata['environment_path'] = command.output_environment_path

      result.execution_time = time.perf_counter() - start
      return result
    except Exception as exc:  # noqa: BLE001
      logger.exception('Security test generation failed')
      return RunResult(
        status=RunStatus.ERROR,
        summary='',
        execution_time=time.perf_counter() - start,
        error=str(exc),
      )

  async def plan(
    self,
    collection: Mapping[str, Any],
    environment: Mapping[str, Any],
    base_url: Optional[str] = None,
    recent_changes: Optional[str] = None,
  ) -> RunResult:
    """Run the pipeline in memory and return the PR artifacts on success."""
    start = time.perf_counter()
    resolved_base_url = self.resolve_base_url(environment, base_url)

    state: Mapping[str, Any] = await self._pipeline.run({
      'base_collection': dict(collection),
      'base_environment': dict(environment),
      'base_url': resolved_base_url,
      'recent_changes': recent_changes or self._settings.recent_changes,
    })

    metadata = {
      'base_url': resolved_base_url,
      'endpoints_summarized': len(state.get('endpoints') or []),
      'step': state.get('step'),
    }
    error = state.get('error')
    if error:
      return RunResult(
        status=RunStatus.ERROR,
        summary='',
        metadata=metadata,
        execution_time=time.perf_counter() - start,
        error=str(error),
      )

    items = state.get('compiled_items') or []
    metadata['tests_generated'] = len(items)
    return RunResult(
      status=RunStatus.SUCCESS,
      summary=f'Generated {len(items)} security tests mapped to OWASP API Top 10 (2023).',
      data=[
        {'name': item.name, 'method': item.method, 'url': item.url, 'checks': len(item.script)}
        for item in items
      ],
      artifacts={
        'collection': state.get('pr_collection'),
        'environment': state.get('pr_environment'),
      },
      metadata=metadata,
      execution_time=time.perf_counter() - start,
    )

  def resolve_base_url(self, environment: Mapping[str, Any], override: Optional[str] = None) -> str:
    """Explicit override, then ``PR_BASEURL``, then the environment, then localhost."""
    return (
      override
      or self._settings.base_url_override
      or environment_value(environment, BASE_URL_KEY)
      or DEFAULT_BASE_URL
    )

  def _load_object(self, location: str, label: str) -> Mapping[str, Any]:
    document = self._repository.load(location)
    if not isinstance(document, Mapping):
      raise ValueError(f'Base {label} at {location} must be a JSON object')
    return document
