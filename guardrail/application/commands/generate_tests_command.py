"""Command object representing a security test generation run."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_BASE_COLLECTION = 'postman/base.collection.json'
DEFAULT_BASE_ENVIRONMENT = 'postman/base.environment.json'
DEFAULT_PR_COLLECTION = 'postman/pr.collection.json'
DEFAULT_PR_ENVIRONMENT = 'postman/pr.environment.json'


@dataclass(frozen=True)
class GenerateTestsCommand:
  """Plan security tests for a base collection and write PR-scoped copies."""
  collection_path: str = DEFAULT_BASE_COLLECTION
  environment_path: str = DEFAULT_BASE_ENVIRONMENT
  output_collection_path: str = DEFAULT_PR_COLLECTION
  output_environment_path: str = DEFAULT_PR_ENVIRONMENT
  base_url: Optional[str] = None
  recent_changes: Optional[str] = None

  def __post_init__(self) -> None:
    if not self.collection_path:
      raise ValueError('collection_path is required')
    if not self.environment_path:
      raise ValueError('environment_path is required')
    if self.output_collection_path == self.collection_path:
      raise ValueError('output_collection_path must differ from collection_path')
    if self.output_environment_path == self.environment_path:
      raise ValueError('output_environment_path must differ from environment_path')
