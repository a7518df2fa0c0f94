import json
import math
from functools import reduce
from typing import Any, Dict, Mapping, Tuple

from moneybook.domain import (
    Account,
    AccountId,
    Category,
    CategoryId,
    CategoryType,
    Record,
    RecordType,
    new_id,
)


def load_seed(path: str) -> Tuple[Tuple[Account, ...], Tuple[Category, ...]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    accounts = tuple(
        Account(
            id=AccountId(a.get("id") or new_id()),
            name=a["name"],
            balance=parse_initial_balance(a.get("balance")),
        )
        for a in data.get("accounts", [])
    )
    categories = tuple(
        Category(
            id=CategoryId(c.get("id") or new_id()),
            name=c["name"],
            type=CategoryType(c["type"]),
        )
        for c in data.get("categories", [])
    )

    return accounts, categories


def parse_initial_balance(value: Any) -> float:
    """Opening balance for a new account; 0 when absent or not a finite number."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        balance = float(value)
    except (TypeError, ValueError):
        return 0.0
    return balance if math.isfinite(balance) else 0.0


def add_record(records: Tuple[Record, ...], r: Record) -> Tuple[Record, ...]:
    return records + (r,)


def signed_effects(r: Record) -> Dict[AccountId, float]:
    if r.type is RecordType.INCOME:
        return {r.from_account_id: r.amount}
    if r.type is RecordType.EXPENSE:
        return {r.from_account_id: -r.amount}
    return {r.from_account_id: -r.amount, r.to_account_id: r.amount}


def apply_effects(
    accounts: Mapping[AccountId, Account], r: Record
) -> Dict[AccountId, Account]:
    updated = dict(accounts)
    for acc_id, delta in signed_effects(r).items():
        acc = updated[acc_id]
        updated[acc_id] = Account(id=acc.id, name=acc.name, balance=acc.balance + delta)
    return updated


def account_balance(records: Tuple[Record, ...], acc_id: str, initial: float = 0.0) -> float:
    return reduce(
        lambda acc, r: acc + signed_effects(r).get(acc_id, 0.0), records, initial
    )
