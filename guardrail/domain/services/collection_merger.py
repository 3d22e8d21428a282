"""Domain service that builds PR-scoped Postman artifacts."""
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping

from guardrail.domain.entities.compiled_test import CompiledTestItem

SECURITY_FOLDER_NAME = 'Security Tests'
BASE_URL_KEY = 'baseUrl'


@dataclass(frozen=True)
class MergedArtifacts:
  collection: Dict[str, Any]
  environment: Dict[str, Any]


def environment_value(environment: Mapping[str, Any], key: str, default: str = '') -> str:
  """Return the value of ``key`` from a Postman environment."""
  for entry in environment.get('values') or []:
    if isinstance(entry, Mapping) and entry.get('key') == key and entry.get('value') is not None:
      return entry['value']
  return default


def set_environment_value(environment: Dict[str, Any], key: str, value: str) -> None:
  """Insert or update ``key`` in place and enable it."""
  values = environment.get('values')
  if not isinstance(values, list):
    values = environment['values'] = []
  for entry in values:
    if isinstance(entry, dict) and entry.get('key') == key:
      entry['value'] = value
      entry['enabled'] = True
      return
  values.append({'key': key, 'value': value, 'enabled': True})


class CollectionMerger:
  """Appends compiled security tests to deep copies of the base artifacts."""

  def merge(
    self,
    base_collection: Mapping[str, Any],
    base_environment: Mapping[str, Any],
    items: Iterable[CompiledTestItem],
    base_url: str,
  ) -> MergedArtifacts:
    collection = copy.deepcopy(dict(base_collection))
    if not isinstance(collection.get('item'), list):
      collection['item'] = []
    collection['item'].append({
      'name': SECURITY_FOLDER_NAME,
      'item': [item.to_postman_item() for item in items],
    })

    environment = copy.deepcopy(dict(base_environment))
    set_environment_value(environment, BASE_URL_KEY, base_url)

    return MergedArtifacts(collection=collection, environment=environment)
