"""Security test planner runner based on LangGraph."""
from __future__ import annotations

from typing import Any, Mapping

from langgraph.graph import END, StateGraph

from guardrail.agents.planner_agent.nodes import PlannerAgentActions
from guardrail.agents.planner_agent.state import PlannerAgentState
from guardrail.application.handlers.protocols import PlannerPipeline
from guardrail.domain.services.collection_merger import CollectionMerger
from guardrail.domain.services.collection_summarizer import CollectionSummarizer
from guardrail.domain.services.plan_renderer import PlanRenderer
from guardrail.domain.services.test_compiler import TestCaseCompiler
from guardrail.ports.output.test_planner import SecurityTestPlanner


class PlannerAgentRunner(PlannerPipeline):
  def __init__(
    self,
    planner: SecurityTestPlanner,
    summarizer: CollectionSummarizer | None = None,
    renderer: PlanRenderer | None = None,
    compiler: TestCaseCompiler | None = None,
    merger: CollectionMerger | None = None,
  ) -> None:
    self._actions = PlannerAgentActions(
      planner=planner,
      summarizer=summarizer or CollectionSummarizer(),
      renderer=renderer or PlanRenderer(),
      compiler=compiler or TestCaseCompiler(),
      merger=merger or CollectionMerger(),
    )
    self._graph = self._build_graph()

  def _build_graph(self):
    workflow = StateGraph(PlannerAgentState)
    workflow.add_node('summarize', self._actions.summarize)
    workflow.add_node('render', self._actions.render)
    workflow.add_node('plan', self._actions.plan)
    workflow.add_node('compile', self._actions.compile)
    workflow.add_node('merge', self._actions.merge)
    workflow.add_node('finalize', self._actions.finalize)

    workflow.set_entry_point('summarize')
    workflow.add_edge('summarize', 'render')
    workflow.add_edge('render', 'plan')
    workflow.add_edge('plan', 'compile')
    workflow.add_edge('compile', 'merge')
    workflow.add_edge('merge', 'finalize')
    workflow.add_edge('finalize', END)
    return workflow.compile()

  async def run(self, state: Mapping[str, Any]) -> Mapping[str, Any]:
    return await self._graph.ainvoke(dict(state))
