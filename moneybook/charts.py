from typing import Mapping, Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from moneybook.settings import DEFAULT_PALETTE


def breakdown_frame(breakdown: Mapping[str, float]) -> pd.DataFrame:
    return pd.DataFrame(
        {"Category": list(breakdown.keys()), "Total": list(breakdown.values())}
    )


def donut_chart(
    breakdown: Mapping[str, float],
    title: str,
    palette: Optional[Sequence[str]] = None,
    hole: float = 0.55,
) -> go.Figure:
    """Donut of label totals; slices keep breakdown order, colours cycle through palette."""
    palette = list(palette or DEFAULT_PALETTE)
    df = breakdown_frame(breakdown)
    if df.empty:
        fig = go.Figure()
        fig.update_layout(title=title)
        return fig

    colors = [palette[i % len(palette)] for i in range(len(df))]
    fig = px.pie(
        df,
        values="Total",
        names="Category",
        title=title,
        hole=hole,
    )
    fig.update_traces(marker=dict(colors=colors), sort=False)
    fig.update_layout(legend=dict(orientation="h", yanchor="top", y=-0.1), margin=dict(t=40, b=10, l=10, r=10))
    return fig
