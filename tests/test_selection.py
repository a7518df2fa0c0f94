import pytest

from moneybook.domain import Account, Category, CategoryType, RecordType
from moneybook.errors import ValidationError
from moneybook.selection import Selection
from moneybook.store import LedgerStore


def make_store():
    return LedgerStore(
        accounts=(Account("cash", "Cash", 0.0), Account("bank", "Bank", 0.0)),
        categories=(
            Category("salary", "Salary", CategoryType.INCOME),
            Category("food", "Food", CategoryType.EXPENSE),
        ),
    )


def test_pick_account_fills_source_then_destination():
    sel = Selection()
    sel.pick_account("cash")
    assert sel.from_account == "cash"
    assert sel.to_account is None

    sel.pick_account("bank")
    sel.pick_account("cash")
    assert sel.from_account == "cash"
    assert sel.to_account == "cash"


def test_available_categories_follow_mode():
    store = make_store()
    sel = Selection()
    assert sel.available_categories(store) == ()

    sel.select_mode("expense")
    assert [c.name for c in sel.available_categories(store)] == ["Food"]

    sel.select_mode("transfer")
    assert sel.available_categories(store) == ()


def test_changing_mode_clears_category():
    sel = Selection()
    sel.select_mode("expense")
    sel.select_category("food")
    sel.select_mode("expense")
    assert sel.category == "food"

    sel.select_mode("income")
    assert sel.category is None


def test_select_mode_rejects_unknown():
    sel = Selection()
    with pytest.raises(ValidationError, match="Unknown record type: refund"):
        sel.select_mode("refund")
    assert sel.mode is None


def test_commit_applies_and_resets_but_keeps_filter():
    store = make_store()
    sel = Selection()
    sel.choose_filter("expense")
    sel.choose_category_type("income")
    sel.choose_account_filter("cash")
    sel.select_mode("expense")
    sel.pick_account("cash")
    sel.select_category("food")

    record = sel.commit(store, 12.5)

    assert record.label == "Food"
    assert record.type is RecordType.EXPENSE
    assert store.get_account("cash").get_or_else(None).balance == -12.5
    assert sel.mode is None
    assert sel.from_account is None
    assert sel.category is None
    assert sel.record_filter == "expense"
    assert sel.new_category_type is CategoryType.INCOME
    assert sel.account_filter == "cash"


def test_commit_transfer():
    store = make_store()
    sel = Selection()
    sel.select_mode("transfer")
    sel.pick_account("cash")
    sel.pick_account("bank")

    record = sel.commit(store, 20)

    assert record.label == "Transfer"
    assert {a.id: a.balance for a in store.accounts} == {"cash": -20, "bank": 20}


def test_failed_commit_keeps_selection():
    store = make_store()
    sel = Selection()
    sel.select_mode("transfer")
    sel.pick_account("cash")

    with pytest.raises(ValidationError, match="Select destination account"):
        sel.commit(store, 20)

    assert sel.mode is RecordType.TRANSFER
    assert sel.from_account == "cash"
    assert store.records == ()


def test_commit_without_amount():
    store = make_store()
    sel = Selection()
    sel.select_mode("income")
    sel.pick_account("cash")
    with pytest.raises(ValidationError, match="Missing required fields"):
        sel.commit(store, None)


def test_choose_filter_rejects_unknown():
    sel = Selection()
    with pytest.raises(ValidationError):
        sel.choose_filter("savings")
    assert sel.record_filter == "all"


def test_clear_accounts_restarts_picking():
    sel = Selection()
    sel.pick_account("cash")
    sel.pick_account("bank")
    sel.clear_accounts()
    sel.pick_account("bank")
    assert sel.from_account == "bank"
    assert sel.to_account is None


def test_create_category_uses_chosen_type():
    store = make_store()
    sel = Selection()
    sel.choose_category_type("expense")

    cat = sel.create_category(store, "Rent")

    assert cat.type is CategoryType.EXPENSE
    assert [c.name for c in store.categories_for("expense")] == ["Food", "Rent"]


def test_create_category_without_type():
    store = make_store()
    sel = Selection()
    with pytest.raises(ValidationError, match="Category name and type are required"):
        sel.create_category(store, "Rent")
    assert len(store.categories) == 2


def test_choose_category_type_rejects_unknown():
    sel = Selection()
    sel.choose_category_type("income")
    with pytest.raises(ValidationError, match="Unknown category type: savings"):
        sel.choose_category_type("savings")
    assert sel.new_category_type is CategoryType.INCOME

    sel.choose_category_type(None)
    assert sel.new_category_type is None


def test_visible_records_combine_type_and_account():
    store = make_store()
    store.apply_record("income", 50, "cash", category_id="salary")
    store.apply_record("expense", 5, "bank")
    store.apply_record("transfer", 10, "cash", to_account_id="bank")
    sel = Selection()

    assert len(sel.visible_records(store)) == 3

    sel.choose_account_filter("bank")
    assert [r.type for r in sel.visible_records(store)] == [RecordType.EXPENSE, RecordType.TRANSFER]

    sel.choose_filter("expense")
    assert [r.amount for r in sel.visible_records(store)] == [5.0]

    sel.choose_account_filter(None)
    sel.choose_filter("all")
    assert len(sel.visible_records(store)) == 3
