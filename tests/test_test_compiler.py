"""Tests for compiling test intents into Postman items."""
from __future__ import annotations

import json

from guardrail.domain.entities.test_intent import (
  HeaderContainsAssertion,
  JsonPathAssertion,
  NoOpAssertion,
  StatusAssertion,
  TestIntent,
)
from guardrail.domain.services.test_compiler import TestCaseCompiler


def _compile(raw):
  return TestCaseCompiler().compile(TestIntent.from_dict(raw))


class TestCompileAssertion:
  def test_status_eq(self):
    script = TestCaseCompiler.compile_assertion('IDOR', StatusAssertion('eq', 403))
    assert script == 'pm.test("IDOR: status == 403", function () { pm.response.to.have.status(403); });'

  def test_status_not(self):
    script = TestCaseCompiler.compile_assertion('t', StatusAssertion('not', 200))
    assert 'pm.expect(pm.response.code).to.not.equal(200)' in script
    assert '"t: status != 200"' in script

  def test_header_contains(self):
    script = TestCaseCompiler.compile_assertion('cache', HeaderContainsAssertion('Cache-Control', 'no-store'))
    assert 'pm.expect(pm.response.headers.get("Cache-Control") || "").to.include("no-store")' in script

  def test_json_path_ops(self):
    exists = TestCaseCompiler.compile_assertion('t', JsonPathAssertion('data.id', 'exists'))
    eq = TestCaseCompiler.compile_assertion('t', JsonPathAssertion('data.n', 'eq', 3))
    not_eq = TestCaseCompiler.compile_assertion('t', JsonPathAssertion('data.role', 'notEq', 'admin'))
    not_contains = TestCaseCompiler.compile_assertion('t', JsonPathAssertion('data', 'notContains', 'password'))

    assert 'pm.expect(_.get(pm.response.json(), "data.id")).to.not.equal(undefined)' in exists
    assert 'pm.expect(_.get(pm.response.json(), "data.n")).to.eql(3)' in eq
    assert 'pm.expect(_.get(pm.response.json(), "data.role")).to.not.eql("admin")' in not_eq
    assert 'pm.expect(String(_.get(pm.response.json(), "data") || "")).to.not.include("password")' in not_contains

  def test_json_path_eq_with_structured_value(self):
    script = TestCaseCompiler.compile_assertion('t', JsonPathAssertion('data', 'eq', {'a': [1, None]}))
    assert '.to.eql({"a": [1, null]})' in script

  def test_noop_is_always_passing(self):
    script = TestCaseCompiler.compile_assertion('t', NoOpAssertion({'type': 'latency'}))
    assert script == 'pm.test("t: no-op", function () { pm.expect(true).to.be.true; });'


  def test_json_path_comparison_without_value_is_noop(self):
    not_contains = TestCaseCompiler.compile_assertion('t', JsonPathAssertion('data', 'notContains'))
    eq = TestCaseCompiler.compile_assertion('t', JsonPathAssertion('data', 'eq'))

    assert not_contains == 'pm.test("t: no-op", function () { pm.expect(true).to.be.true; });'
    assert eq == not_contains
    assert '.to.not.include("")' not in not_contains

  def test_planner_output_without_needle_compiles_to_noop(self):
    item = _compile({'name': 'leak', 'assertions': [{'type': 'jsonPath', 'path': 'data', 'op': 'notContains'}]})
    assert item.script == ('pm.test("leak: no-op", function () { pm.expect(true).to.be.true; });',)


class TestEscaping:
  def test_hostile_test_name_cannot_close_the_literal(self):
    name = 'x"); require("child_process"); //'
    script = TestCaseCompiler.compile_assertion(name, StatusAssertion('eq', 403))

    assert script.startswith('pm.test(' + json.dumps(f'{name}: status == 403') + ', function () {')
    assert '"x");' not in script

  def test_hostile_header_and_path(self):
    header = TestCaseCompiler.compile_assertion('t', HeaderContainsAssertion('X"; a', 'b\\"); c'))
    path = TestCaseCompiler.compile_assertion('t', JsonPathAssertion('a"]); b', 'exists'))

    assert json.dumps('X"; a') in header
    assert json.dumps('b\\"); c') in header
    assert json.dumps('a"]); b') in path

  def test_non_ascii_and_line_separators_are_escaped(self):
    script = TestCaseCompiler.compile_assertion('Bestellung \u00fc \u2028', StatusAssertion('eq', 401))

    assert '\\u00fc' in script
    assert '\\u2028' in script
    assert script.isascii()


class TestCompile:
  def test_idor_on_order(self, idor_intent):
    item = TestCaseCompiler().compile(TestIntent.from_dict(idor_intent))

    assert item.name == '[API1:2023][high] IDOR on order'
    assert item.method == 'GET'
    assert item.url == '{{baseUrl}}/orders/2'
    assert item.script == ('pm.test("IDOR on order: status == 403", function () { pm.response.to.have.status(403); });',)
    assert item.description == idor_intent['notes']

  def test_auth_mode_injects_token_header(self):
    admin = _compile({'request': {'auth': 'admin'}})
    expired = _compile({'request': {'auth': 'expired'}})
    anonymous = _compile({'request': {'auth': 'none'}})

    assert admin.headers == ({'key': 'Authorization', 'value': 'Bearer {{admin_token}}'},)
    assert expired.headers == ({'key': 'Authorization', 'value': 'Bearer {{expired_token}}'},)
    assert anonymous.headers == ()

  def test_existing_authorization_header_is_kept(self):
    item = _compile({'request': {'auth': 'user', 'headers': [{'key': 'authorization', 'value': 'Basic abc'}]}})
    assert item.headers == ({'key': 'authorization', 'value': 'Basic abc'},)

  def test_body_is_compact_raw_json(self):
    item = _compile({'request': {'method': 'PATCH', 'path': '/users/1', 'body': {'role': 'admin', 'name': 'Zoë'}}})
    postman = item.to_postman_item()

    assert postman['request']['body'] == {
      'mode': 'raw',
      'raw': '{"role":"admin","name":"Zoë"}',
      'options': {'raw': {'language': 'json'}},
    }

  def test_postman_item_shape(self, idor_intent):
    postman = _compile(idor_intent).to_postman_item()

    assert postman['name'] == '[API1:2023][high] IDOR on order'
    assert postman['request']['url'] == {'raw': '{{baseUrl}}/orders/2'}
    assert 'body' not in postman['request']
    assert postman['event'] == [{
      'listen': 'test',
      'script': {
        'type': 'text/javascript',
        'exec': ['pm.test("IDOR on order: status == 403", function () { pm.response.to.have.status(403); });'],
      },
    }]

  def test_postman_item_is_a_fresh_copy(self):
    item = _compile({'request': {'auth': 'user'}})
    item.to_postman_item()['request']['header'][0]['value'] = 'tampered'

    assert item.to_postman_item()['request']['header'][0]['value'] == 'Bearer {{user_token}}'

  def test_compile_all_never_raises_on_garbage(self, idor_intent):
    items = TestCaseCompiler().compile_all([idor_intent, None, 'text', {'assertions': [42]}])

    assert len(items) == 4
    assert items[1].name == '[N/A][low] Unnamed security test'
    assert items[3].script == ('pm.test("Unnamed security test: no-op", function () { pm.expect(true).to.be.true; });',)
