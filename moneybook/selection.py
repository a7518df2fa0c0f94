from dataclasses import dataclass
from typing import Any, Optional, Tuple

from moneybook.domain import AccountId, Category, CategoryId, CategoryType, Record, RecordType
from moneybook.errors import ValidationError
from moneybook.filters import ALL_RECORDS, RECORD_FILTERS, filter_records


@dataclass
class Selection:
    """The record being composed in the UI, before it is committed.

    Flow: mode -> source account -> (destination if transfer) ->
    (category if income/expense) -> amount -> commit. Any step can be redone
    before commit; only commit touches the store.
    """

    mode: Optional[RecordType] = None
    from_account: Optional[AccountId] = None
    to_account: Optional[AccountId] = None
    category: Optional[CategoryId] = None
    new_category_type: Optional[CategoryType] = None
    record_filter: str = ALL_RECORDS
    account_filter: Optional[AccountId] = None

    def select_mode(self, mode: str) -> None:
        try:
            new_mode = RecordType(mode)
        except ValueError:
            raise ValidationError(f"Unknown record type: {mode}") from None
        if new_mode is not self.mode:
            # categories are filtered by mode, an old pick no longer applies
            self.category = None
        self.mode = new_mode

    def pick_account(self, acc_id: str) -> None:
        # first pick is the source, later picks set the destination
        if self.from_account is None:
            self.from_account = AccountId(acc_id)
        else:
            self.to_account = AccountId(acc_id)

    def clear_accounts(self) -> None:
        self.from_account = None
        self.to_account = None

    def select_category(self, cat_id: Optional[str]) -> None:
        self.category = CategoryId(cat_id) if cat_id else None

    def choose_category_type(self, cat_type: Optional[str]) -> None:
        if not cat_type:
            self.new_category_type = None
            return
        try:
            self.new_category_type = CategoryType(cat_type)
        except ValueError:
            raise ValidationError(f"Unknown category type: {cat_type}") from None

    def create_category(self, store, name: Optional[str]) -> Category:
        cat_type = self.new_category_type.value if self.new_category_type else None
        return store.create_category(name, cat_type)

    def choose_filter(self, record_filter: str) -> None:
        if record_filter not in RECORD_FILTERS:
            raise ValidationError(f"Unknown record filter: {record_filter}")
        self.record_filter = record_filter

    def choose_account_filter(self, acc_id: Optional[str]) -> None:
        self.account_filter = AccountId(acc_id) if acc_id else None

    def visible_records(self, store) -> Tuple[Record, ...]:
        return filter_records(store.records, self.record_filter, self.account_filter)

    def available_categories(self, store) -> Tuple[Category, ...]:
        return store.categories_for(self.mode.value if self.mode else None)

    def commit(self, store, amount: Any) -> Record:
        record = store.apply_record(
            self.mode,
            amount,
            self.from_account,
            to_account_id=self.to_account,
            category_id=self.category,
        )
        self.reset()
        return record

    def reset(self) -> None:
        self.mode = None
        self.clear_accounts()
        self.category = None
