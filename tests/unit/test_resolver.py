from __future__ import annotations

from lib_immutable_params.domain.locator import parse
from lib_immutable_params.domain.nodes import freeze
from lib_immutable_params.domain.resolver import ABSENT, Found, resolve, resolve_first

ROOT = freeze(
    {
        "user": {
            "name": {"first": "Mikko"},
            "location": {"address": "X", "city": "Helsinki"},
            "tags": ["admin", {"scope": "billing"}],
            "nickname": None,
        }
    }
)


def test_resolves_nested_value() -> None:
    assert resolve(ROOT, parse(":user:location:address")) == Found("X")


def test_resolves_intermediate_mapping() -> None:
    resolution = resolve(ROOT, parse(":user:name"))
    assert isinstance(resolution, Found)
    assert resolution.value is ROOT["user"]["name"]


def test_stored_none_is_found() -> None:
    assert resolve(ROOT, parse(":user:nickname")) == Found(None)


def test_missing_key_is_absent() -> None:
    assert resolve(ROOT, parse(":user:location:zipcode")) is ABSENT
    assert resolve(ROOT, parse(":nobody")) is ABSENT


def test_scalar_is_not_traversed() -> None:
    assert resolve(ROOT, parse(":user:location:city:0")) is ABSENT
    assert resolve(ROOT, parse(":user:name:first:length")) is ABSENT


def test_sequence_index() -> None:
    assert resolve(ROOT, parse(":user:tags:0")) == Found("admin")
    assert resolve(ROOT, parse(":user:tags:1:scope")) == Found("billing")


def test_invalid_sequence_index_is_absent() -> None:
    for expression in (":user:tags:2", ":user:tags:-1", ":user:tags:first", ":user:tags:٣"):
        assert resolve(ROOT, parse(expression)) is ABSENT


def test_absent_is_falsy() -> None:
    assert not ABSENT
    assert repr(ABSENT) == "ABSENT"


def test_resolve_first_honours_order() -> None:
    chain = [parse(":user:zip"), parse(":user:location:city"), parse(":user:location:address")]
    assert resolve_first(ROOT, chain) == Found("Helsinki")


def test_resolve_first_all_absent() -> None:
    assert resolve_first(ROOT, [parse(":a"), parse(":b")]) is ABSENT
    assert resolve_first(ROOT, []) is ABSENT


def test_resolution_works_on_plain_structures() -> None:
    assert resolve({"a": [{"b": 1}]}, parse(":a:0:b")) == Found(1)
