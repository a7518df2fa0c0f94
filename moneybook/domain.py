from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, NewType, Optional
from uuid import uuid4

AccountId = NewType("AccountId", str)
CategoryId = NewType("CategoryId", str)
RecordId = NewType("RecordId", str)

UNCATEGORIZED = "Uncategorized"
TRANSFER_LABEL = "Transfer"


class RecordType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class CategoryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


def new_id() -> str:
    return str(uuid4())


@dataclass(frozen=True)
class Account:
    id: AccountId
    name: str
    balance: float


@dataclass(frozen=True)
class Category:
    id: CategoryId
    name: str
    type: CategoryType


@dataclass(frozen=True)
class Record:
    id: RecordId
    type: RecordType
    amount: float    # always positive, the sign comes from type
    label: str
    from_account_id: AccountId
    to_account_id: Optional[AccountId] = None  # transfers only
    category_id: Optional[CategoryId] = None


class Summary(NamedTuple):
    total_income: float
    total_expense: float
    net: float
