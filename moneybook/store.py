from typing import Any, Dict, Optional, Tuple

import structlog

from moneybook.domain import (
    Account,
    AccountId,
    Category,
    CategoryId,
    CategoryType,
    Record,
    RecordType,
    Summary,
    new_id,
)
from moneybook.errors import ValidationError
from moneybook.events import (
    ACCOUNT_CREATED,
    CATEGORY_CREATED,
    RECORD_ADDED,
    VALIDATION_FAILED,
    EventBus,
)
from moneybook.functional import Maybe, safe_account, safe_category, validate_record
from moneybook.reports import aggregate, summary
from moneybook.transforms import add_record, apply_effects, load_seed, parse_initial_balance

logger = structlog.get_logger(__name__)


class LedgerStore:
    """Accounts, categories and the append-only record list of one session.

    Every mutation is validated first and only then applied, so a
    ValidationError always leaves the store exactly as it was.
    """

    def __init__(
        self,
        accounts: Tuple[Account, ...] = (),
        categories: Tuple[Category, ...] = (),
        bus: Optional[EventBus] = None,
    ):
        self._accounts: Dict[AccountId, Account] = {a.id: a for a in accounts}
        self._categories: Dict[CategoryId, Category] = {c.id: c for c in categories}
        self._records: Tuple[Record, ...] = ()
        self.bus = bus if bus is not None else EventBus()

    @classmethod
    def from_seed(cls, path, bus: Optional[EventBus] = None) -> "LedgerStore":
        accounts, categories = load_seed(str(path))
        logger.info("seed_loaded", path=str(path), accounts=len(accounts), categories=len(categories))
        return cls(accounts, categories, bus=bus)

    @property
    def accounts(self) -> Tuple[Account, ...]:
        return tuple(self._accounts.values())

    @property
    def categories(self) -> Tuple[Category, ...]:
        return tuple(self._categories.values())

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    def get_account(self, acc_id: Optional[str]) -> Maybe[Account]:
        return safe_account(self._accounts, acc_id)

    def get_category(self, cat_id: Optional[str]) -> Maybe[Category]:
        return safe_category(self._categories, cat_id)

    def categories_for(self, mode: Optional[str]) -> Tuple[Category, ...]:
        if not mode:
            return ()
        return tuple(c for c in self._categories.values() if c.type.value == mode)

    def create_account(self, name: Optional[str], initial_balance: Any = 0) -> Account:
        name = (name or "").strip()
        if not name:
            self._reject("create_account", "Account name is required")
        acc = Account(id=AccountId(new_id()), name=name, balance=parse_initial_balance(initial_balance))
        self._accounts[acc.id] = acc
        logger.info("account_created", account_id=acc.id, name=acc.name, balance=acc.balance)
        self.bus.publish(ACCOUNT_CREATED, {"account_id": acc.id, "name": acc.name, "balance": acc.balance})
        return acc

    def create_category(self, name: Optional[str], type: Optional[str]) -> Category:
        name = (name or "").strip()
        try:
            cat_type = CategoryType(type) if type else None
        except ValueError:
            cat_type = None
        if not name or cat_type is None:
            self._reject("create_category", "Category name and type are required")
        cat = Category(id=CategoryId(new_id()), name=name, type=cat_type)
        self._categories[cat.id] = cat
        logger.info("category_created", category_id=cat.id, name=cat.name, type=cat.type.value)
        self.bus.publish(CATEGORY_CREATED, {"category_id": cat.id, "name": cat.name, "type": cat.type.value})
        return cat

    def apply_record(
        self,
        mode: Any,
        amount: Any,
        from_account_id: Optional[str],
        to_account_id: Optional[str] = None,
        category_id: Optional[str] = None,
    ) -> Record:
        result = validate_record(
            mode, amount, from_account_id, to_account_id, category_id,
            self._accounts, self._categories,
        )
        if result.is_left():
            self._reject("apply_record", result.get_error().message)
        record = result.get_or_raise()

        # both new values are computed before either is assigned
        accounts = apply_effects(self._accounts, record)
        records = add_record(self._records, record)
        self._accounts, self._records = accounts, records

        logger.info(
            "record_applied",
            record_id=record.id,
            type=record.type.value,
            amount=record.amount,
            label=record.label,
        )
        self.bus.publish(RECORD_ADDED, {
            "record_id": record.id,
            "type": record.type.value,
            "amount": record.amount,
            "label": record.label,
        })
        return record

    def summary(self) -> Summary:
        return summary(self._records)

    def aggregate(self, record_type: RecordType) -> Dict[str, float]:
        return aggregate(self._records, record_type)

    def total_balance(self) -> float:
        return sum(a.balance for a in self._accounts.values())

    def _reject(self, operation: str, message: str):
        logger.warning("validation_failed", operation=operation, reason=message)
        self.bus.publish(VALIDATION_FAILED, {"operation": operation, "message": message})
        raise ValidationError(message)
