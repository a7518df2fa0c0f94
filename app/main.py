import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st
import pandas as pd

from moneybook.calculator import evaluate
from moneybook.charts import donut_chart
from moneybook.domain import CategoryType, RecordType
from moneybook.errors import ValidationError
from moneybook.events import RECORD_ADDED, ACCOUNT_CREATED, CATEGORY_CREATED, history_handler
from moneybook.filters import RECORD_FILTERS, top_labels
from moneybook.log import configure_logging
from moneybook.reports import ReportService
from moneybook.selection import Selection
from moneybook.settings import get_settings
from moneybook.store import LedgerStore

settings = get_settings()

st.set_page_config(page_title="Moneybook", layout="wide")

if "ledger" not in st.session_state:
    configure_logging(settings.log_level, settings.log_json)
    store = LedgerStore.from_seed(settings.seed_path)
    st.session_state.event_history = []
    for name in (RECORD_ADDED, ACCOUNT_CREATED, CATEGORY_CREATED):
        store.bus.subscribe(name, history_handler(st.session_state.event_history))
    st.session_state.ledger = store
    st.session_state.selection = Selection()
    st.session_state.display = ""
    st.session_state.form_error = ""
    st.session_state.flash = ""

store: LedgerStore = st.session_state.ledger
selection: Selection = st.session_state.selection
money = settings.format_amount


# keypad callbacks run before the display widget is drawn, so they may write to it
def press_key(key):
    st.session_state.display += key


def clear_display():
    st.session_state.display = ""


def calculate():
    try:
        value = evaluate(st.session_state.display)
        st.session_state.display = f"{value:g}"
        st.session_state.form_error = ""
    except ValidationError as e:
        st.session_state.form_error = e.message


def save_record():
    text = st.session_state.display
    try:
        amount = evaluate(text) if text.strip() else None
        record = selection.commit(store, amount)
    except ValidationError as e:
        st.session_state.form_error = e.message
        return
    st.session_state.display = ""
    st.session_state.form_error = ""
    st.session_state.flash = f"✅ {record.label}: {money(record.amount)}"


def show_flash():
    if st.session_state.flash:
        st.success(st.session_state.flash)
        st.session_state.flash = ""


def records_df(records):
    names = {a.id: a.name for a in store.accounts}
    return pd.DataFrame([
        {
            "Label": r.label,
            "Type": r.type.value,
            "Amount": -r.amount if r.type is RecordType.EXPENSE else r.amount,
            "From": names.get(r.from_account_id, "-"),
            "To": names.get(r.to_account_id, "-") if r.to_account_id else "-",
        }
        for r in records
    ], columns=["Label", "Type", "Amount", "From", "To"])


menu = st.sidebar.radio(
    "Menu",
    ["🏠 Overview", "➕ Add Record", "🧾 Records", "💳 Accounts", "🗂 Categories"]
)

if menu == "🏠 Overview":
    rpt = ReportService().dashboard(store.records, store.accounts)
    result = rpt["result"]
    totals = result["summary"]

    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric("Income", money(totals.total_income))
    with k2:
        st.metric("Expense", money(totals.total_expense))
    with k3:
        st.metric("Net", money(totals.net))
    with k4:
        st.metric("Total Balance", money(store.total_balance()))

    st.header("💳 Accounts")
    if store.accounts:
        account_cols = st.columns(len(store.accounts))
        for col, acc in zip(account_cols, store.accounts):
            with col:
                st.metric(acc.name, money(acc.balance))
    else:
        st.info("No accounts yet")

    chart_left, chart_right = st.columns(2)
    with chart_left:
        fig_exp = donut_chart(result["expense_breakdown"], "Expenses by category",
                              settings.chart_palette, settings.donut_hole)
        st.plotly_chart(fig_exp, use_container_width=True)
    with chart_right:
        fig_inc = donut_chart(result["income_breakdown"], "Income by category",
                              settings.chart_palette, settings.donut_hole)
        st.plotly_chart(fig_inc, use_container_width=True)

    top = list(top_labels(store.records, RecordType.EXPENSE, 5))
    if top:
        st.subheader("Top expense categories")
        st.table(pd.DataFrame([{"Category": n, "Amount": money(v)} for n, v in top]))

elif menu == "➕ Add Record":
    st.title("➕ Add Record")

    modes = [t.value for t in RecordType]
    mode_cols = st.columns(len(modes))
    for col, mode in zip(mode_cols, modes):
        with col:
            active = selection.mode is not None and selection.mode.value == mode
            if st.button(mode.capitalize(), key=f"mode_{mode}", type="primary" if active else "secondary"):
                selection.select_mode(mode)
                st.rerun()

    account_names = {a.id: a.name for a in store.accounts}
    st.caption(
        f"**From:** {account_names.get(selection.from_account, '—')}  "
        f"**To:** {account_names.get(selection.to_account, '—')}"
    )
    st.write("**Accounts**")
    acc_cols = st.columns(max(1, len(store.accounts)))
    for col, acc in zip(acc_cols, store.accounts):
        with col:
            if st.button(acc.name, key=f"acc_{acc.id}"):
                selection.pick_account(acc.id)
                st.rerun()
    if st.button("Clear accounts", key="btn_clear_accounts"):
        selection.clear_accounts()
        st.rerun()

    if selection.mode is not None and selection.mode is not RecordType.TRANSFER:
        options = selection.available_categories(store)
        if options:
            labels = ["Uncategorized"] + [c.name for c in options]
            ids = [None] + [c.id for c in options]
            current = ids.index(selection.category) if selection.category in ids else 0
            picked = st.selectbox("Category", labels, index=current)
            selection.select_category(ids[labels.index(picked)])
        else:
            st.info(f"No {selection.mode.value} categories yet")

    st.subheader("Amount")
    st.text_input("Display", key="display")
    keypad = ["7", "8", "9", "/", "4", "5", "6", "*", "1", "2", "3", "-", "0", ".", "(", ")", "+"]
    for row in range(0, len(keypad), 4):
        cols = st.columns(4)
        for col, key in zip(cols, keypad[row:row + 4]):
            with col:
                st.button(key, key=f"key_{row}_{key}", on_click=press_key, args=(key,), use_container_width=True)

    c1, c2, c3 = st.columns(3)
    with c1:
        st.button("C", key="btn_clear_display", on_click=clear_display, use_container_width=True)
    with c2:
        st.button("=", key="btn_calculate", on_click=calculate, use_container_width=True)
    with c3:
        st.button("💾 Save", key="btn_save_record", on_click=save_record, type="primary", use_container_width=True)

    if st.session_state.form_error:
        st.error(st.session_state.form_error)
    else:
        show_flash()

elif menu == "🧾 Records":
    st.title("🧾 Records")
    choice = st.selectbox(
        "Show",
        list(RECORD_FILTERS),
        index=list(RECORD_FILTERS).index(selection.record_filter),
    )
    selection.choose_filter(choice)
    account_ids = [None] + [a.id for a in store.accounts]
    account_labels = ["All accounts"] + [a.name for a in store.accounts]
    current = account_ids.index(selection.account_filter) if selection.account_filter in account_ids else 0
    picked = st.selectbox("Account", account_labels, index=current)
    selection.choose_account_filter(account_ids[account_labels.index(picked)])
    shown = selection.visible_records(store)
    if shown:
        df = records_df(shown)
        disp = df.assign(Amount=df["Amount"].map(money))
        st.table(disp)
        st.download_button("⬇ Download CSV", df.to_csv(index=False), file_name="records.csv", mime="text/csv")
    else:
        st.info("No records yet")

    if st.session_state.event_history:
        st.subheader("📜 Event History")
        st.dataframe(pd.DataFrame(st.session_state.event_history), use_container_width=True)

elif menu == "💳 Accounts":
    st.title("💳 Accounts")
    show_flash()
    for acc in store.accounts:
        st.metric(acc.name, money(acc.balance))

    with st.form("account_form", clear_on_submit=True):
        name = st.text_input("Account name")
        balance = st.text_input("Initial balance", value="0")
        submitted = st.form_submit_button("Save account")
        if submitted:
            try:
                acc = store.create_account(name, balance)
                st.session_state.flash = f"Account {acc.name} created"
                st.rerun()
            except ValidationError as e:
                st.error(e.message)

elif menu == "🗂 Categories":
    st.title("🗂 Categories")
    show_flash()
    left, right = st.columns(2)
    with left:
        st.write("**Income**")
        for c in store.categories_for(CategoryType.INCOME.value):
            st.markdown(f"- {c.name}")
    with right:
        st.write("**Expense**")
        for c in store.categories_for(CategoryType.EXPENSE.value):
            st.markdown(f"- {c.name}")

    with st.form("category_form", clear_on_submit=True):
        name = st.text_input("Category name")
        types = [t.value for t in CategoryType]
        current = types.index(selection.new_category_type.value) if selection.new_category_type else None
        cat_type = st.radio("Type", types, index=current, horizontal=True)
        submitted = st.form_submit_button("Save category")
        if submitted:
            try:
                selection.choose_category_type(cat_type)
                cat = selection.create_category(store, name)
                st.session_state.flash = f"Category {cat.name} created"
                st.rerun()
            except ValidationError as e:
                st.error(e.message)
