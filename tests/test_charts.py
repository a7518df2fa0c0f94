from moneybook.charts import breakdown_frame, donut_chart
from moneybook.settings import DEFAULT_PALETTE


def test_breakdown_frame_keeps_order():
    df = breakdown_frame({"Food": 50, "Transport": 5})
    assert list(df["Category"]) == ["Food", "Transport"]
    assert list(df["Total"]) == [50, 5]


def test_donut_chart_has_hole_and_breakdown_values():
    fig = donut_chart({"Food": 50, "Transport": 5, "Rent": 700}, "Expenses", hole=0.4)

    trace = fig.data[0]
    assert trace.type == "pie"
    assert trace.hole == 0.4
    assert list(trace.labels) == ["Food", "Transport", "Rent"]
    assert list(trace.values) == [50, 5, 700]
    assert fig.layout.title.text == "Expenses"


def test_donut_chart_cycles_palette():
    breakdown = {f"c{i}": i + 1 for i in range(4)}
    fig = donut_chart(breakdown, "Income", palette=["#111111", "#222222", "#333333"])
    assert list(fig.data[0].marker.colors) == ["#111111", "#222222", "#333333", "#111111"]


def test_donut_chart_default_palette():
    fig = donut_chart({"Salary": 100}, "Income")
    assert list(fig.data[0].marker.colors) == [DEFAULT_PALETTE[0]]


def test_donut_chart_empty_breakdown():
    fig = donut_chart({}, "Expenses")
    assert len(fig.data) == 0
    assert fig.layout.title.text == "Expenses"
