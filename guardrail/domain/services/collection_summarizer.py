"""Domain service that flattens a Postman collection into endpoint descriptors."""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple

from guardrail.domain.entities.endpoint_descriptor import EndpointDescriptor

logger = logging.getLogger(__name__)

MAX_SUMMARY_ENDPOINTS = 200
PATH_PLACEHOLDER = '{}'

_HOST_PREFIX = re.compile(r'^https?://[^/]+', re.IGNORECASE)
_VARIABLE = re.compile(r'\{\{[^}]+\}\}')


class CollectionSummarizer:
  """Builds the deduplicated endpoint list the planner sees."""

  def __init__(self, max_endpoints: int = MAX_SUMMARY_ENDPOINTS) -> None:
    self._max_endpoints = max_endpoints

  def summarize(self, collection: Mapping[str, Any]) -> List[EndpointDescriptor]:
    unique: Dict[str, EndpointDescriptor] = {}
    items = collection.get('item') if isinstance(collection, Mapping) else None

    for endpoint in self._walk(items, ()):
      key = endpoint.identifier()
      if key in unique:
        continue
      unique[key] = endpoint
      if len(unique) >= self._max_endpoints:
        logger.debug('Endpoint summary capped at %d entries', self._max_endpoints)
        break

    return list(unique.values())

  def _walk(self, items: Any, folder: Tuple[str, ...]) -> Iterator[EndpointDescriptor]:
    if not isinstance(items, list):
      return
    for node in items:
      if not isinstance(node, Mapping):
        continue
      if 'item' in node:
        yield from self._walk(node['item'], folder + (str(node.get('name') or 'Folder'),))
        continue
      request = node.get('request')
      if not request or not isinstance(request, (Mapping, str)):
        continue
      yield self._describe(node, request, folder)

  def _describe(self, node: Mapping[str, Any], request: Any, folder: Tuple[str, ...]) -> EndpointDescriptor:
    # Postman allows a bare URL string as the whole request
    if isinstance(request, str):
      request = {'url': request}

    raw_url = _raw_url(request.get('url'))
    path = normalize_path(raw_url)
    url = request.get('url') if isinstance(request.get('url'), Mapping) else {}

    return EndpointDescriptor(
      name=str(node.get('name') or ''),
      folder=folder,
      method=str(request.get('method') or 'GET').upper(),
      path=path or raw_url,
      has_auth_header=_has_authorization(request.get('header')),
      path_params=tuple(
        str(v.get('key')) for v in _list(url.get('variable')) if isinstance(v, Mapping) and v.get('key')
      ),
    )


def normalize_path(raw_url: str) -> str:
  """Strip scheme, host and query, and replace ``{{variables}}`` with ``{}``."""
  without_host = _HOST_PREFIX.sub('', raw_url)
  without_query = without_host.split('?', 1)[0].split('#', 1)[0]
  return _VARIABLE.sub(PATH_PLACEHOLDER, without_query)


def _raw_url(url: Any) -> str:
  if isinstance(url, str):
    return url
  if not isinstance(url, Mapping):
    return ''
  if url.get('raw'):
    return str(url['raw'])
  segments = url.get('path')
  if isinstance(segments, list):
    return '/' + '/'.join(str(s) for s in segments)
  return ''


def _has_authorization(headers: Iterable[Any] | None) -> bool:
  if not isinstance(headers, list):
    return False
  return any(
    isinstance(h, Mapping) and str(h.get('key') or '').lower() == 'authorization'
    for h in headers
  )


def _list(value: Any) -> list:
  return value if isinstance(value, list) else []
