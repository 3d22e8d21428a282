"""Node implementations for the security test planner pipeline."""
from __future__ import annotations

import logging
from typing import Any, Dict

from guardrail.domain.services.collection_merger import CollectionMerger
from guardrail.domain.services.collection_summarizer import CollectionSummarizer
from guardrail.domain.services.plan_renderer import DEFAULT_POLICY, PlanRenderer, PromptInjectionError
from guardrail.domain.services.test_compiler import TestCaseCompiler
from guardrail.ports.output.test_planner import SecurityTestPlanner

logger = logging.getLogger(__name__)

PROMPT_REJECTED = 'prompt_rejected'
PLANNING_FAILED = 'planning_failed'


class PlannerAgentActions:
  def __init__(
    self,
    planner: SecurityTestPlanner,
    summarizer: CollectionSummarizer,
    renderer: PlanRenderer,
    compiler: TestCaseCompiler,
    merger: CollectionMerger,
  ) -> None:
    self._planner = planner
    self._summarizer = summarizer
    self._renderer = renderer
    self._compiler = compiler
    self._merger = merger

  def summarize(self, state: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten the base collection into unique endpoints."""
    endpoints = self._summarizer.summarize(state.get('base_collection') or {})
    logger.info('Summarized %d unique endpoints', len(endpoints))
    state['endpoints'] = endpoints
    state['step'] = 'endpoints_summarized'
    return state

  def render(self, state: Dict[str, Any]) -> Dict[str, Any]:
    """Render the planning prompt; an unresolved marker aborts the run."""
    try:
      state['prompt'] = self._renderer.render(
        state.get('endpoints', []),
        base_url=state['base_url'],
        policy=state.get('policy') or DEFAULT_POLICY,
        recent_changes=state.get('recent_changes'),
      )
      state['step'] = 'prompt_rendered'
    except PromptInjectionError as e:
      state['error'] = str(e)
      state['step'] = PROMPT_REJECTED
    return state

  async def plan(self, state: Dict[str, Any]) -> Dict[str, Any]:
    """Ask the external planner for test intents."""
    if state.get('error'):
      return state

    try:
      tests = await self._planner.plan(state['prompt'])
      logger.info('Planner returned %d tests', len(tests))
      state['planned_tests'] = tests
      state['step'] = 'tests_planned'
    except Exception as e:
      state['error'] = str(e)
      state['step'] = PLANNING_FAILED
    return state

  def compile(self, state: Dict[str, Any]) -> Dict[str, Any]:
    """Compile planned tests into Postman items."""
    if state.get('error'):
      return state

    state['compiled_items'] = self._compiler.compile_all(state.get('planned_tests', []))
    state['step'] = 'tests_compiled'
    return state

  def merge(self, state: Dict[str, Any]) -> Dict[str, Any]:
    """Produce PR-scoped copies of the base collection and environment."""
    if state.get('error'):
      return state

    merged = self._merger.merge(
      state.get('base_collection') or {},
      state.get('base_environment') or {},
      state.get('compiled_items', []),
      base_url=state['base_url'],
    )
    state['pr_collection'] = merged.collection
    state['pr_environment'] = merged.environment
    state['step'] = 'artifacts_merged'
    return state

  def finalize(self, state: Dict[str, Any]) -> Dict[str, Any]:
    if state.get('error'):
      state['pr_collection'] = None
      state['pr_environment'] = None
    else:
      state['step'] = 'complete'
    return state
