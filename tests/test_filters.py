from itertools import islice
from typing import Iterable

import pytest

from moneybook.domain import Record, RecordType
from moneybook.errors import ValidationError
from moneybook.filters import (
    by_account,
    by_type,
    filter_records,
    iter_records,
    top_labels,
)


def make_sample():
    return (
        Record("r1", RecordType.EXPENSE, 300, "Food", "a1"),
        Record("r2", RecordType.EXPENSE, 200, "Transport", "a1"),
        Record("r3", RecordType.INCOME, 5000, "Salary", "a1"),
        Record("r4", RecordType.EXPENSE, 700, "Food", "a2"),
        Record("r5", RecordType.TRANSFER, 100, "Transfer", "a1", "a2"),
    )


def test_by_type():
    result = list(filter(by_type("expense"), make_sample()))
    assert [r.id for r in result] == ["r1", "r2", "r4"]


def test_by_account_matches_both_sides_of_transfer():
    result = list(filter(by_account("a2"), make_sample()))
    assert [r.id for r in result] == ["r4", "r5"]


def test_iter_records_is_lazy_stop_early():
    records = make_sample()
    calls = {"n": 0}

    def pred(r: Record) -> bool:
        calls["n"] += 1
        return r.type is RecordType.EXPENSE

    first_two = list(islice(iter_records(records, pred), 2))

    assert len(first_two) == 2
    assert calls["n"] < len(records)


def test_filter_records_all_keeps_order():
    records = make_sample()
    assert filter_records(records, "all") == records


def test_filter_records_by_type():
    assert [r.id for r in filter_records(make_sample(), "transfer")] == ["r5"]
    assert filter_records((), "income") == ()


def test_filter_records_by_account():
    assert [r.id for r in filter_records(make_sample(), "all", "a2")] == ["r4", "r5"]
    assert [r.id for r in filter_records(make_sample(), "expense", "a2")] == ["r4"]
    assert filter_records(make_sample(), "income", "a2") == ()


def test_filter_records_unknown_filter():
    with pytest.raises(ValidationError):
        filter_records(make_sample(), "savings")


def test_top_labels_sum_and_order():
    result = list(top_labels(make_sample(), RecordType.EXPENSE, k=2))
    assert result == [("Food", 1000), ("Transport", 200)]


def test_top_labels_accepts_generator_input():
    def stream() -> Iterable[Record]:
        yield from make_sample()

    assert list(top_labels(stream(), RecordType.INCOME, k=5)) == [("Salary", 5000)]


def test_top_labels_k_zero():
    assert list(top_labels(make_sample(), RecordType.EXPENSE, k=0)) == []
