from collections import defaultdict
from typing import Callable, Iterable, Iterator, Optional, Tuple

from moneybook.domain import Record, RecordType
from moneybook.errors import ValidationError

ALL_RECORDS = "all"
RECORD_FILTERS = (ALL_RECORDS,) + tuple(t.value for t in RecordType)


def by_type(record_type: str):
    def _filter(r: Record) -> bool:
        return r.type.value == record_type

    return _filter


def by_account(acc_id: str):
    def _filter(r: Record) -> bool:
        return acc_id in (r.from_account_id, r.to_account_id)

    return _filter


def iter_records(
    records: Iterable[Record], pred: Callable[[Record], bool]
) -> Iterator[Record]:
    for r in records:
        if pred(r):
            yield r


def filter_records(
    records: Tuple[Record, ...], record_filter: str, account_id: Optional[str] = None
) -> Tuple[Record, ...]:
    """Records shown in the list for the chosen filter ("all" or a record type),
    optionally narrowed to the records touching one account."""
    if record_filter not in RECORD_FILTERS:
        raise ValidationError(f"Unknown record filter: {record_filter}")
    preds = []
    if record_filter != ALL_RECORDS:
        preds.append(by_type(record_filter))
    if account_id:
        preds.append(by_account(account_id))
    if not preds:
        return tuple(records)
    return tuple(iter_records(records, lambda r: all(p(r) for p in preds)))


def top_labels(
    records: Iterable[Record], record_type: RecordType, k: int
) -> Iterator[Tuple[str, float]]:
    totals: dict[str, float] = defaultdict(float)
    for r in iter_records(records, by_type(record_type.value)):
        totals[r.label] += r.amount

    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    for label, total in ordered[: max(0, k)]:
        yield label, total
