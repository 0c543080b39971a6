"""Unit tests for AuthenticationSubFlow / AuthenticationExecution rules."""

import pytest

from authflow.domain.entities import AuthenticationExecution, AuthenticationSubFlow
from authflow.domain.exceptions import ValidationException


def _subflow(**overrides) -> AuthenticationSubFlow:
    fields = {"alias": "A", "realm_id": "test", "parent_flow_alias": "browser copy"}
    fields.update(overrides)
    return AuthenticationSubFlow(**fields)


def test_enforce_guardrails_forces_false_flags() -> None:
    subflow = _subflow(top_level=True, built_in=True)
    subflow.enforce_guardrails()
    assert subflow.top_level is False
    assert subflow.built_in is False


def test_validate_for_create_accepts_new_subflow() -> None:
    _subflow().validate_for_create()


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"id": "already"}, "id"),
        ({"realm_id": ""}, "realm_id"),
        ({"parent_flow_alias": ""}, "parent_flow_alias"),
        ({"alias": ""}, "alias"),
        ({"provider_id": ""}, "provider_id"),
    ],
)
def test_validate_for_create_rejects(overrides: dict, field: str) -> None:
    with pytest.raises(ValidationException) as exc_info:
        _subflow(**overrides).validate_for_create()
    assert exc_info.value.details["field"] == field


def test_validate_for_update_requires_id() -> None:
    with pytest.raises(ValidationException) as exc_info:
        _subflow().validate_for_update()
    assert exc_info.value.details["field"] == "id"
    _subflow(id="f1").validate_for_update()


def test_execution_references() -> None:
    assert AuthenticationExecution(id="e1", flow_id="f1").references("f1")
    assert not AuthenticationExecution(id="e1", flow_id="f1").references("f2")
    # plain authenticator executions never match, not even an empty id
    assert not AuthenticationExecution(id="e2").references("")
