"""CLI adapter for interacting with the guardrail service."""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, Mapping, Optional

import click

from guardrail.adapters.presentation.json_presenter import JsonPresenter
from guardrail.adapters.presentation.markdown_presenter import MarkdownPresenter
from guardrail.adapters.presentation.text_presenter import TextPresenter
from guardrail.application.commands.convert_report_command import (
  DEFAULT_RUN_REPORT,
  DEFAULT_SARIF_OUTPUT,
  ConvertReportCommand,
)
from guardrail.application.commands.generate_tests_command import (
  DEFAULT_BASE_COLLECTION,
  DEFAULT_BASE_ENVIRONMENT,
  DEFAULT_PR_COLLECTION,
  DEFAULT_PR_ENVIRONMENT,
  GenerateTestsCommand,
)
from guardrail.application.queries.run_result import RunResult
from guardrail.common.config import get_settings
from guardrail.ports.input.guardrail_service import GuardrailService
from guardrail.ports.input.result_presenter import ResultPresenter

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def default_presenters() -> Dict[str, ResultPresenter]:
  return {
    'text': TextPresenter(),
    'json': JsonPresenter(),
    'markdown': MarkdownPresenter(),
  }


class CLIAdapter:
  def __init__(
    self,
    service: GuardrailService,
    presenters: Optional[Mapping[str, ResultPresenter]] = None,
  ):
    self._service = service
    self._presenters = dict(presenters or default_presenters())

  def run(self) -> None:
    self.build_cli()()

  def build_cli(self) -> click.Group:
    format_option = click.option(
      '--format', 'output_format',
      type=click.Choice(sorted(self._presenters)), default='text', show_default=True,
      help='Output format for the run summary',
    )

    @click.group()
    @click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
    def cli(verbose: bool) -> None:
      """Plan OWASP API security tests for a Postman collection and report failures as SARIF."""
      level = logging.DEBUG if verbose else get_settings().log_level
      logging.basicConfig(level=level, format=LOG_FORMAT)

    @cli.command('plan')
    @click.option('--collection', default=DEFAULT_BASE_COLLECTION, show_default=True, help='Base Postman collection')
    @click.option('--environment', default=DEFAULT_BASE_ENVIRONMENT, show_default=True, help='Base Postman environment')
    @click.option('--out-collection', default=DEFAULT_PR_COLLECTION, show_default=True, help='PR-scoped collection to write')
    @click.option('--out-environment', default=DEFAULT_PR_ENVIRONMENT, show_default=True, help='PR-scoped environment to write')
    @click.option('--base-url', default=None, help='Target base URL (overrides PR_BASEURL and the environment)')
    @click.option('--recent-changes', default=None, help='Summary of recent changes (overrides PR_DIFF_SUMMARY)')
    @format_option
    def plan(
      collection: str,
      environment: str,
      out_collection: str,
      out_environment: str,
      base_url: Optional[str],
      recent_changes: Optional[str],
      output_format: str,
    ) -> None:
      """Generate security tests and write PR-scoped collection and environment.

      Examples:

        # Defaults: postman/base.* -> postman/pr.*
        cli plan

        # Point the tests at a preview deployment
        cli plan --base-url https://pr-42.preview.example.com
      """
      try:
        command = GenerateTestsCommand(
          collection_path=collection,
          environment_path=environment,
          output_collection_path=out_collection,
          output_environment_path=out_environment,
          base_url=base_url,
          recent_changes=recent_changes,
        )
      except ValueError as e:
        raise click.BadParameter(str(e))
      result = asyncio.run(self._service.generate_tests(command))
      self._emit(result, output_format)

    @cli.command('sarif')
    @click.option('--report', default=DEFAULT_RUN_REPORT, show_default=True, help='newman JSON run report')
    @click.option('--out', default=DEFAULT_SARIF_OUTPUT, show_default=True, help='SARIF file to write')
    @format_option
    def sarif(report: str, out: str, output_format: str) -> None:
      """Convert failed assertions of a newman run into a SARIF report."""
      try:
        command = ConvertReportCommand(report_path=report, output_path=out)
      except ValueError as e:
        raise click.BadParameter(str(e))
      result = asyncio.run(self._service.convert_report(command))
      self._emit(result, output_format)

    return cli

  def _emit(self, result: RunResult, output_format: str) -> None:
    presenter = self._presenters[output_format]
    if not result.ok:
      click.echo(presenter.present_error(RuntimeError(result.error or 'run failed')), err=True)
      click.get_current_context().exit(1)
    click.echo(presenter.present(result))
