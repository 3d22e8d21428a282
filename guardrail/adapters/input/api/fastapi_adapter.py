"""FastAPI adapter exposing the guardrail over HTTP."""
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from guardrail.agents.planner_agent.nodes import PROMPT_REJECTED
from guardrail.ports.input.guardrail_service import GuardrailService


class PlanPayload(BaseModel):
  """Base Postman artifacts plus optional planning context."""
  collection: Dict[str, Any] = Field(..., description='Base Postman v2.1 collection')
  environment: Dict[str, Any] = Field(default_factory=dict, description='Base Postman environment')
  base_url: Optional[str] = Field(default=None, description='Target base URL override')
  recent_changes: Optional[str] = Field(default=None, description='Summary of recent changes')

  model_config = {
    'json_schema_extra': {
      'examples': [
        {
          'collection': {
            'info': {'name': 'Shop API'},
            'item': [
              {
                'name': 'Get order',
                'request': {
                  'method': 'GET',
                  'url': {'raw': '{{baseUrl}}/orders/:id', 'variable': [{'key': 'id'}]},
                  'header': [{'key': 'Authorization', 'value': 'Bearer {{user_token}}'}],
                },
              }
            ],
          },
          'environment': {'values': [{'key': 'baseUrl', 'value': 'http://localhost:8888'}]},
          'recent_changes': 'Added order lookup by id',
        }
      ]
    }
  }


class PlanResponse(BaseModel):
  collection: Dict[str, Any]
  environment: Dict[str, Any]
  tests_generated: int
  summary: str


class RunReportPayload(BaseModel):
  """A newman JSON run report; only ``run.executions`` is read."""
  run: Dict[str, Any] = Field(default_factory=dict, description='newman run section')


class FastAPIAdapter:
  def __init__(self, service: GuardrailService):
    self._service = service
    self.app = FastAPI(
      title='API Security Guardrail',
      version='0.1.0',
      description='Plans OWASP API Top 10 security tests for Postman collections '
                  'and converts newman run reports into SARIF.',
    )
    self._configure_routes()

  def _configure_routes(self) -> None:
    @self.app.post('/api/v1/plan', tags=['Planning'], response_model=PlanResponse)
    async def plan(payload: PlanPayload):
      """
      Plan security tests for a Postman collection.

      The pipeline will:
      1. Summarize the collection's endpoints
      2. Render the planning prompt and ask the planner for test intents
      3. Compile the intents into Postman test items
      4. Return PR-scoped copies of the collection and environment
      """
      result = await self._service.plan_artifacts(
        payload.collection,
        payload.environment,
        base_url=payload.base_url,
        recent_changes=payload.recent_changes,
      )
      if not result.ok:
        status_code = 422 if result.metadata.get('step') == PROMPT_REJECTED else 500
        raise HTTPException(status_code=status_code, detail=result.error)
      return PlanResponse(
        collection=result.artifacts['collection'],
        environment=result.artifacts['environment'],
        tests_generated=result.metadata.get('tests_generated', 0),
        summary=result.summary,
      )

    @self.app.post('/api/v1/sarif', tags=['Reporting'])
    async def sarif(payload: RunReportPayload):
      """Convert a newman run report into a SARIF 2.1.0 document."""
      return self._service.report_to_sarif(payload.model_dump())

    @self.app.get('/health', tags=['Health'])
    async def health():
      """Health check endpoint."""
      return {'status': 'healthy'}
