"""LangChain-backed implementation of the security test planner port."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import JsonOutputParser
from langchain_core.prompts import ChatPromptTemplate
from openai import OpenAIError

from guardrail.ports.output.test_planner import PlannerError, SecurityTestPlanner

logger = logging.getLogger(__name__)


class LangChainTestPlanner(SecurityTestPlanner):
  """Dispatches the rendered prompt through ``prompt | llm | JsonOutputParser``.

  The chat model is built on first use so that commands which never plan do
  not need planner credentials.
  """

  def __init__(self, llm_factory: Callable[[], BaseChatModel]) -> None:
    self._llm_factory = llm_factory
    self._chain = None

  async def plan(self, prompt: str) -> List[Dict[str, Any]]:
    try:
      reply = await self._get_chain().ainvoke({'planning_prompt': prompt})
    except OutputParserException as e:
      raise PlannerError(f'Planner reply is not valid JSON: {e}', cause=e) from e
    except OpenAIError as e:
      raise PlannerError(f'Planner request failed: {e}', cause=e) from e
    return self._extract_tests(reply)

  def _get_chain(self):
    if self._chain is None:
      self._chain = self._build_chain(self._llm_factory())
    return self._chain

  @staticmethod
  def _build_chain(llm: BaseChatModel):
    prompt = ChatPromptTemplate.from_messages([
      (
        'system',
        'You plan API security tests. Reply with a single JSON object and nothing else.',
      ),
      ('human', '{planning_prompt}'),
    ])
    return prompt | llm | JsonOutputParser()

  @staticmethod
  def _extract_tests(reply: Optional[Any]) -> List[Dict[str, Any]]:
    if not isinstance(reply, dict):
      logger.warning('Planner reply is not a JSON object; using an empty plan')
      return []
    tests = reply.get('tests')
    if not isinstance(tests, list):
      logger.warning('Planner reply has no "tests" list; using an empty plan')
      return []
    return tests
