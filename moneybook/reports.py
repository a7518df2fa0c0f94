from typing import Any, Callable, Dict, Iterable, Sequence

from moneybook.domain import UNCATEGORIZED, Account, Record, RecordType, Summary


def aggregate(records: Iterable[Record], record_type) -> Dict[str, float]:
    """Sum amounts of one record type per label, in order of first appearance."""
    wanted = RecordType(record_type)
    totals: Dict[str, float] = {}
    for r in records:
        if r.type is not wanted:
            continue
        key = r.label or UNCATEGORIZED
        totals[key] = totals.get(key, 0.0) + r.amount
    return totals


def summary(records: Iterable[Record]) -> Summary:
    income = 0.0
    expense = 0.0
    for r in records:
        if r.type is RecordType.INCOME:
            income += r.amount
        elif r.type is RecordType.EXPENSE:
            expense += r.amount
    return Summary(total_income=income, total_expense=expense, net=income - expense)


def summary_step(records, accounts, acc=None) -> Dict[str, Any]:
    return {"summary": summary(records)}


def income_breakdown_step(records, accounts, acc=None) -> Dict[str, Any]:
    return {"income_breakdown": aggregate(records, RecordType.INCOME)}


def expense_breakdown_step(records, accounts, acc=None) -> Dict[str, Any]:
    return {"expense_breakdown": aggregate(records, RecordType.EXPENSE)}


def balances_step(records, accounts: Iterable[Account], acc=None) -> Dict[str, Any]:
    return {"balances": {a.name: a.balance for a in accounts}}


DASHBOARD_STEPS = (summary_step, income_breakdown_step, expense_breakdown_step, balances_step)


class ReportService:
    """Facade for building dashboard reports from injected aggregators.

    aggregators: sequence of functions taking (records, accounts, acc) -> dict (partial results),
    where acc holds everything produced by earlier aggregators.
    """

    def __init__(self, aggregators: Sequence[Callable[..., Dict[str, Any]]] = DASHBOARD_STEPS):
        self.aggregators = aggregators

    def dashboard(self, records: Iterable[Record], accounts: Iterable[Account]) -> Dict[str, Any]:
        records = tuple(records)
        accounts = tuple(accounts)
        report = {"steps": [], "result": {}}
        acc: Dict[str, Any] = {}
        for agg in self.aggregators:
            out = agg(records, accounts, acc)
            report["steps"].append({"aggregator": getattr(agg, "__name__", str(agg)), "output": out})
            if isinstance(out, dict):
                acc.update(out)
        report["result"] = acc
        return report
