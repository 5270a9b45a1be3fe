from __future__ import annotations

from lib_immutable_params.domain.locator import parse
from lib_immutable_params.domain.mutator import remove_path, set_value
from lib_immutable_params.domain.nodes import freeze, thaw


def make_root():
    return freeze(
        {
            "user": {
                "name": {"first": "Mikko"},
                "location": {"address": "X", "city": "Helsinki"},
            },
            "tags": ["a", "b"],
        }
    )


def test_set_replaces_existing_leaf() -> None:
    root = make_root()
    updated = set_value(root, parse(":user:location:city"), "Espoo")
    assert updated["user"]["location"]["city"] == "Espoo"
    assert root["user"]["location"]["city"] == "Helsinki"


def test_set_shares_untouched_siblings() -> None:
    root = make_root()
    updated = set_value(root, parse(":user:location:city"), "Espoo")
    assert updated is not root
    assert updated["user"] is not root["user"]
    assert updated["user"]["location"] is not root["user"]["location"]
    assert updated["user"]["name"] is root["user"]["name"]
    assert updated["tags"] is root["tags"]


def test_set_creates_missing_intermediate_mappings() -> None:
    root = make_root()
    updated = set_value(root, parse(":billing:address:street"), "Main")
    assert thaw(updated["billing"]) == {"address": {"street": "Main"}}
    assert "billing" not in root


def test_set_replaces_obstructing_values() -> None:
    root = make_root()
    through_scalar = set_value(root, parse(":user:location:city:code"), "HEL")
    assert thaw(through_scalar["user"]["location"]["city"]) == {"code": "HEL"}
    through_sequence = set_value(root, parse(":tags:0"), "z")
    assert thaw(through_sequence["tags"]) == {"0": "z"}


def test_set_top_level_key() -> None:
    root = make_root()
    updated = set_value(root, parse("flag"), True)
    assert updated["flag"] is True
    assert updated["user"] is root["user"]


def test_remove_deletes_only_terminal_key() -> None:
    root = make_root()
    updated = remove_path(root, parse(":user:location:address"))
    assert thaw(updated["user"]["location"]) == {"city": "Helsinki"}
    assert updated["user"]["name"] is root["user"]["name"]
    assert root["user"]["location"]["address"] == "X"


def test_remove_keeps_emptied_ancestors() -> None:
    root = make_root()
    updated = remove_path(root, parse(":user:name:first"))
    assert thaw(updated["user"]["name"]) == {}


def test_remove_missing_is_identity() -> None:
    root = make_root()
    assert remove_path(root, parse(":user:location:zipcode")) is root
    assert remove_path(root, parse(":nobody:here")) is root


def test_remove_through_non_mapping_is_identity() -> None:
    root = make_root()
    assert remove_path(root, parse(":user:location:city:first")) is root
    assert remove_path(root, parse(":tags:0")) is root


def test_remove_subtree() -> None:
    root = make_root()
    updated = remove_path(root, parse(":user"))
    assert set(updated) == {"tags"}
    assert updated["tags"] is root["tags"]
