"""Shared test fixtures for guardrail tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add project root to path so tests can import guardrail
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


@pytest.fixture
def base_collection():
  return {
    'info': {'name': 'Shop API', 'schema': 'https://schema.getpostman.com/json/collection/v2.1.0/collection.json'},
    'item': [
      {
        'name': 'Users',
        'item': [
          {
            'name': 'Get User',
            'request': {
              'method': 'get',
              'url': {'raw': '{{baseUrl}}/users/{{userId}}', 'variable': [{'key': 'userId'}]},
              'header': [{'key': 'authorization', 'value': 'Bearer {{user_token}}'}],
            },
          },
          {
            'name': 'Update User',
            'request': {
              'method': 'PATCH',
              'url': {'raw': 'https://api.example.com/users/{{userId}}?notify=true'},
              'body': {'mode': 'raw', 'raw': '{"name": "x"}'},
            },
          },
        ],
      },
      {
        'name': 'Orders',
        'item': [
          {
            'name': 'Get Order',
            'request': {
              'method': 'GET',
              'url': {'raw': '{{baseUrl}}/orders/{{orderId}}', 'variable': [{'key': 'orderId'}]},
            },
          },
        ],
      },
    ],
  }


@pytest.fixture
def base_environment():
  return {
    'name': 'local',
    'values': [
      {'key': 'baseUrl', 'value': 'http://localhost:3000', 'enabled': True},
      {'key': 'user_token', 'value': '', 'enabled': True},
    ],
  }


@pytest.fixture
def idor_intent():
  return {
    'name': 'IDOR on order',
    'owasp': 'API1:2023',
    'risk': 'high',
    'request': {'method': 'GET', 'path': '/orders/2', 'auth': 'user'},
    'assertions': [{'type': 'status', 'op': 'eq', 'value': 403}],
    'notes': 'User A must not read order 2 owned by user B.',
  }


@pytest.fixture
def newman_report():
  return {
    'run': {
      'executions': [
        {
          'item': {'name': 'Get User'},
          'assertions': [
            {'assertion': 'no-auth check', 'error': {'message': 'expected 401'}},
            {'assertion': 'passing check'},
          ],
        },
        {
          'item': {'name': '[API1:2023][high] IDOR on order'},
          'assertions': [
            {'assertion': 'IDOR on order: status == 403', 'error': {'message': 'expected 200 to be 403'}},
          ],
        },
        {
          'item': {'name': 'Profile'},
          'assertions': [
            {'assertion': 'cache-control on profile: header Cache-Control contains no-store', 'error': {}},
          ],
        },
      ],
    },
  }
