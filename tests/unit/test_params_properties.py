from __future__ import annotations

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from lib_immutable_params import Params
from lib_immutable_params.domain.locator import Locator
from lib_immutable_params.domain.mutator import set_value
from lib_immutable_params.domain.nodes import freeze


KEY = st.text(alphabet="abcxyz", min_size=1, max_size=3)
SCALAR = st.one_of(st.none(), st.booleans(), st.integers(), st.text(max_size=5))
VALUE = st.recursive(
    SCALAR,
    lambda children: st.one_of(
        st.lists(children, max_size=3),
        st.dictionaries(KEY, children, max_size=3),
    ),
    max_leaves=10,
)
MAPPING = st.dictionaries(KEY, VALUE, max_size=4)
LOCATOR = st.lists(KEY, min_size=1, max_size=4).map(tuple)


@settings(deadline=None)
@given(MAPPING)
def test_round_trip(source) -> None:
    plain = Params(source).to_plain()
    assert plain == source
    assert plain is not source


@settings(deadline=None)
@given(MAPPING, LOCATOR, VALUE)
def test_get_after_set(source, keys, value) -> None:
    params = Params(source)
    updated = Params._wrap(set_value(params._root, Locator(keys), freeze(value)))
    assert updated.get(keys) == value


@settings(deadline=None)
@given(MAPPING, LOCATOR, LOCATOR)
def test_absent_locators_are_noops(source, keys, destination) -> None:
    params = Params(source)
    assume(not params.defined(keys))
    assert params.rm(keys) == params
    assert params.cp(keys, destination) == params
    assert params.map(keys, lambda value: "changed") == params


@settings(deadline=None)
@given(MAPPING, LOCATOR, LOCATOR, VALUE)
def test_mv_relocates_value(source, src, destination, value) -> None:
    assume(src[: len(destination)] != destination and destination[: len(src)] != src)
    params = Params._wrap(set_value(Params(source)._root, Locator(src), freeze(value)))
    moved = params.mv(src, destination)
    assert moved.get(destination) == value
    assert not moved.defined(src)


@settings(deadline=None)
@given(MAPPING, LOCATOR)
def test_rm_is_idempotent(source, keys) -> None:
    params = Params(source)
    once = params.rm(keys)
    assert once.rm(keys) == once


@settings(deadline=None)
@given(MAPPING, LOCATOR, VALUE)
def test_original_survives_writes(source, keys, value) -> None:
    params = Params(source)
    params.map(keys, lambda _: value)
    params.rm(keys)
    params.cp(keys, ("copy",))
    params.mv(keys, ("moved",))
    assert params.to_plain() == source


@settings(deadline=None)
@given(st.dictionaries(KEY, SCALAR, min_size=1), st.lists(KEY, min_size=1, max_size=4), SCALAR)
def test_first_resolving_fallback_wins(source, chain, default) -> None:
    params = Params(source)
    expected = next((source[key] for key in chain if key in source), default)
    first, *fallbacks = chain
    assert params.get_or_else(first, default, fallbacks=fallbacks) == expected
