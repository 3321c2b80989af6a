"""
Tests for the account list and current account selection.
"""

import pytest
from worklog.domain.models import Account
from worklog.services.account_registry import AccountRegistry, DEFAULT_ACCOUNT_ID


@pytest.fixture
def registry():
    return AccountRegistry(default_name="メイン案件")


def test_new_registry_seeds_default_account(registry):
    assert [a.id for a in registry.accounts] == [DEFAULT_ACCOUNT_ID]
    assert registry.current.name == "メイン案件"


def test_empty_payload_seeds_default_account():
    registry = AccountRegistry.from_payload([], default_name="Main")
    assert registry.current_id == DEFAULT_ACCOUNT_ID


def test_payload_keeps_order_and_selects_first():
    registry = AccountRegistry.from_payload([{"id": "b", "name": "B"}, {"id": "a", "name": "A"}])

    assert [a.id for a in registry.accounts] == ["b", "a"]
    assert registry.current_id == "b"


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_create_ignores_blank_names(registry, name):
    assert registry.create(name) is None
    assert len(registry.accounts) == 1


def test_create_appends_and_selects(registry):
    account = registry.create("Client A")

    assert registry.accounts[-1] == account
    assert registry.current_id == account.id
    assert account.name == "Client A"


def test_rapid_creation_gives_unique_ids(registry):
    ids = {registry.create(f"Client {i}").id for i in range(20)}
    assert len(ids) == 20


def test_delete_current_selects_first_remaining(registry):
    registry.create("Client A")
    b = registry.create("Client B")

    assert registry.delete(b.id) is True
    assert registry.current_id == DEFAULT_ACCOUNT_ID


def test_delete_other_keeps_selection(registry):
    a = registry.create("Client A")
    registry.select(DEFAULT_ACCOUNT_ID)

    assert registry.delete(a.id) is True
    assert registry.current_id == DEFAULT_ACCOUNT_ID


def test_delete_unknown_is_noop(registry):
    assert registry.delete("missing") is False
    assert len(registry.accounts) == 1


def test_delete_last_account_is_refused(registry):
    assert registry.delete(DEFAULT_ACCOUNT_ID) is False
    assert registry.current_id == DEFAULT_ACCOUNT_ID


def test_select_unknown_raises(registry):
    with pytest.raises(ValueError):
        registry.select("missing")


def test_replace_all_falls_back_to_first(registry):
    registry.replace_all([Account(id="x", name="X"), Account(id="y", name="Y")])

    assert registry.current_id == "x"


def test_replace_all_keeps_existing_selection(registry):
    registry.replace_all([Account(id="x", name="X"), Account(id=DEFAULT_ACCOUNT_ID, name="Main")])

    assert registry.current_id == DEFAULT_ACCOUNT_ID


def test_blank_account_name_rejected_by_model():
    with pytest.raises(ValueError):
        Account(id="x", name="  ")


def test_create_accepts_long_names(registry):
    account = registry.create("x" * 201)

    assert account.name == "x" * 201
    assert registry.current_id == account.id
