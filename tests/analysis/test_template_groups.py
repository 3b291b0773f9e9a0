"""Tests for the template-family rollup."""

from __future__ import annotations

import math

import pytest

from symsize.analysis.signature import NON_TEMPLATE_GROUP_PREFIX
from symsize.analysis.template_groups import build_template_groups
from symsize.model.symbol import SymbolLocation


def _by_id(groups):
    return {g.id: g for g in groups}


def test_empty_input_yields_no_groups() -> None:
    assert build_template_groups([]) == []


def test_aliases_at_one_location_count_once(make_symbol) -> None:
    """Two symbols at the same (section, address) double the plain sum only."""
    symbols = [
        make_symbol("Vec<int>", section_id="S", addr=100, size=16),
        make_symbol("Vec<int>", section_id="S", addr=100, size=16),
    ]
    (group,) = build_template_groups(symbols)

    assert group.id == "Vec"
    assert group.is_template is True
    assert group.totals.symbol_count == 2
    assert group.totals.size_bytes == 32
    assert group.totals.unique_size_bytes == 16

    (spec,) = group.specializations
    assert spec.key == "int"
    assert spec.totals.symbol_count == 2
    assert spec.totals.size_bytes == 32
    assert spec.totals.unique_size_bytes == 16


def test_non_template_symbol_gets_prefixed_group(make_symbol) -> None:
    (group,) = build_template_groups([make_symbol("main", section_id="S", size=8)])

    assert group.id == f"{NON_TEMPLATE_GROUP_PREFIX} main"
    assert group.id == "[non-template] main"
    assert group.display_name == "main"
    assert group.is_template is False
    assert [s.key for s in group.specializations] == [None]


def test_specializations_split_and_keep_first_seen_order(make_symbol) -> None:
    symbols = [
        make_symbol("Vec<int>::push", section_id="S", addr=0, size=10),
        make_symbol("Vec<float>::push", section_id="S", addr=16, size=20),
        make_symbol("Vec<int>::pop", section_id="S", addr=32, size=5),
    ]
    (group,) = build_template_groups(symbols)

    assert [s.key for s in group.specializations] == ["int", "float"]
    assert group.totals.specialization_count == 2
    assert group.specialization("int").totals.symbol_count == 2
    assert group.specialization("int").totals.size_bytes == 15
    assert group.specialization("float").totals.size_bytes == 20
    assert group.totals.largest_symbol_size_bytes == 20
    assert group.totals.smallest_symbol_size_bytes == 5
    with pytest.raises(KeyError):
        group.specialization("char")


def test_group_order_is_first_occurrence(make_symbol) -> None:
    symbols = [
        make_symbol("b"),
        make_symbol("A<int>"),
        make_symbol("a"),
        make_symbol("A<char>"),
        make_symbol("b"),
    ]
    groups = build_template_groups(symbols)
    assert [g.id for g in groups] == [
        "[non-template] b",
        "A",
        "[non-template] a",
    ]


def test_members_keep_input_order(make_symbol) -> None:
    symbols = [make_symbol("T<x>", id=f"s{i}") for i in range(5)]
    (group,) = build_template_groups(symbols)
    assert [s.symbol_id for s in group.symbols] == ["s0", "s1", "s2", "s3", "s4"]


def test_same_name_non_templates_merge_regardless_of_location(make_symbol) -> None:
    """Non-template grouping is by name only; dedup still uses location."""
    symbols = [
        make_symbol("helper", section_id="S1", addr=0, size=4),
        make_symbol("helper", section_id="S2", addr=64, size=6),
    ]
    (group,) = build_template_groups(symbols)
    assert group.totals.symbol_count == 2
    assert group.totals.unique_size_bytes == 10


def test_distinct_non_template_names_never_merge(make_symbol) -> None:
    groups = build_template_groups([make_symbol("foo"), make_symbol("bar")])
    assert len(groups) == 2


def test_template_and_non_template_with_same_base_stay_apart(make_symbol) -> None:
    symbols = [make_symbol("Foo<int>"), make_symbol("Foo")]
    groups = _by_id(build_template_groups(symbols))
    assert set(groups) == {"Foo", "[non-template] Foo"}


def test_empty_argument_list_joins_null_specialization(make_symbol) -> None:
    (group,) = build_template_groups([make_symbol("Foo<>"), make_symbol("Foo< >")])
    assert group.is_template is True
    assert [s.key for s in group.specializations] == [None]
    assert group.specializations[0].totals.symbol_count == 2


@pytest.mark.parametrize("size", [math.nan, math.inf, -math.inf, None])
def test_non_finite_size_is_zero(make_symbol, size) -> None:
    (group,) = build_template_groups(
        [make_symbol("Foo<int>", section_id="S", addr=1, size=size)]
    )
    assert group.symbols[0].size_bytes == 0
    assert group.totals.size_bytes == 0
    assert group.totals.unique_size_bytes == 0
    assert group.totals.smallest_symbol_size_bytes == 0


def test_missing_name_is_non_template(make_symbol) -> None:
    (group,) = build_template_groups([make_symbol(None, size=3)])
    assert group.is_template is False
    assert group.id == "[non-template] "
    assert group.symbols[0].name is None


def test_duplicate_ids_both_count(make_symbol) -> None:
    symbols = [
        make_symbol("X<int>", id="dup", section_id="S", addr=0, size=4),
        make_symbol("X<int>", id="dup", section_id="S", addr=8, size=4),
    ]
    (group,) = build_template_groups(symbols)
    assert group.totals.symbol_count == 2
    assert group.totals.unique_size_bytes == 8


def test_alias_dedup_takes_maximum_size(make_symbol) -> None:
    symbols = [
        make_symbol("F<a>", section_id="S", addr=0, size=10),
        make_symbol("F<b>", section_id="S", addr=0, size=14),
    ]
    (group,) = build_template_groups(symbols)
    assert group.totals.size_bytes == 24
    assert group.totals.unique_size_bytes == 14
    # Each specialization only sees its own member
    assert group.specialization("a").totals.unique_size_bytes == 10
    assert group.specialization("b").totals.unique_size_bytes == 14


def test_primary_location_drives_dedup(make_symbol) -> None:
    symbols = [
        make_symbol(
            "F<a>",
            section_id="S",
            addr=0,
            size=8,
            primary_location=SymbolLocation(addr=500),
        ),
        make_symbol("F<a>", section_id="S", addr=500, size=8),
    ]
    (group,) = build_template_groups(symbols)
    assert group.totals.unique_size_bytes == 8


def test_symbol_summary_fields(make_symbol) -> None:
    loc = SymbolLocation(addr=0x60000010, window_id="flash", block_id="text")
    sym = make_symbol(
        "Ring<8>::put",
        id="sym_7",
        name_mangled="_ZN4RingILi8EE3putEv",
        size=24,
        section_id="sec_2",
        block_id="text",
        window_id="flash",
        addr=0x10,
        primary_location=loc,
    )
    summary = build_template_groups([sym])[0].symbols[0]
    assert summary.symbol_id == "sym_7"
    assert summary.name == "Ring<8>::put"
    assert summary.mangled_name == "_ZN4RingILi8EE3putEv"
    assert summary.size_bytes == 24
    assert summary.specialization_key == "8"
    assert summary.section_id == "sec_2"
    assert summary.block_id == "text"
    assert summary.window_id == "flash"
    assert summary.addr == 0x10
    assert summary.primary_location == loc


def test_empty_mangled_name_becomes_none(make_symbol) -> None:
    summary = build_template_groups([make_symbol("x", name_mangled="")])[0].symbols[0]
    assert summary.mangled_name is None


def test_partition_and_unique_bound_hold(make_symbol) -> None:
    names = ["A<int>", "A<char>", "B<A<int>>", "main", "main", "a < b", "C<>"]
    symbols = [
        make_symbol(name, section_id="S" if i % 2 else None, addr=i % 3, size=i + 1)
        for i, name in enumerate(names * 3)
    ]
    groups = build_template_groups(symbols)

    assert sum(g.totals.symbol_count for g in groups) == len(symbols)
    member_ids = [s.symbol_id for g in groups for s in g.symbols]
    assert sorted(member_ids) == sorted(s.id for s in symbols)
    for group in groups:
        assert group.totals.unique_size_bytes <= group.totals.size_bytes
        assert (
            sum(s.totals.symbol_count for s in group.specializations)
            == group.totals.symbol_count
        )
        for spec in group.specializations:
            assert spec.totals.unique_size_bytes <= spec.totals.size_bytes


def test_build_is_deterministic(make_symbol) -> None:
    symbols = [
        make_symbol("A<int>", section_id="S", addr=1, size=3),
        make_symbol("main", section_id="S", addr=2, size=5),
        make_symbol("A<long>", section_id="S", addr=1, size=7),
    ]
    first = build_template_groups(symbols)
    second = build_template_groups(symbols)
    assert first == second
    assert [g.to_dict() for g in first] == [g.to_dict() for g in second]


def test_results_are_frozen(make_symbol) -> None:
    (group,) = build_template_groups([make_symbol("A<int>", size=1)])
    with pytest.raises(AttributeError):
        group.totals.size_bytes = 99  # type: ignore[misc]
    assert isinstance(group.symbols, tuple)
    assert isinstance(group.specializations, tuple)


def test_accepts_any_iterable(make_symbol) -> None:
    groups = build_template_groups(make_symbol("A<int>") for _ in range(3))
    assert groups[0].totals.symbol_count == 3


def test_negative_size_counts_as_zero(make_symbol) -> None:
    symbols = [
        make_symbol("Vec<int>", section_id="S", addr=100, size=8),
        make_symbol("Vec<int>", section_id="S", addr=100, size=-4),
        make_symbol("foo", size=10),
        make_symbol("foo", size=-1),
    ]
    groups = _by_id(build_template_groups(symbols))

    vec = groups["Vec"]
    assert [s.size_bytes for s in vec.symbols] == [8, 0]
    assert vec.totals.size_bytes == 8
    assert vec.totals.unique_size_bytes == 8
    assert vec.totals.smallest_symbol_size_bytes == 0

    foo = groups["[non-template] foo"]
    assert foo.totals.size_bytes == 10
    assert foo.totals.unique_size_bytes == 10


@pytest.mark.parametrize("addr", [math.nan, math.inf])
def test_non_finite_address_is_dropped_from_summary(make_symbol, addr) -> None:
    sym = make_symbol(
        "A<int>", section_id="S", addr=addr, primary_location=SymbolLocation(addr=addr)
    )
    summary = build_template_groups([sym])[0].symbols[0]
    assert summary.addr is None
    assert summary.primary_location == SymbolLocation(addr=None)
