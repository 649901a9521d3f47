"""Plotly chart builders for the SubTally dashboard."""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .theme import theme_tokens

TOKENS = theme_tokens()

__all__ = [
    "build_breakdown_chart",
    "build_share_chart",
]


def _empty_plotly_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[
            dict(
                text=message,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(color=TOKENS.neutral_grey, size=14, family=TOKENS.label_font),
            )
        ],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=0, r=0, t=20, b=0),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def build_breakdown_chart(breakdown_df: pd.DataFrame, currency_symbol: str | None = "") -> go.Figure:
    """Render a horizontal bar chart of subtotals per subscription."""

    if breakdown_df.empty:
        return _empty_plotly_figure("No subscription payments fall in this period.")

    data = breakdown_df.sort_values("Subtotal", ascending=True).copy()
    prefix = currency_symbol or ""
    data["formatted_subtotal"] = data["Subtotal"].map(lambda x: f"{prefix}{x:,.2f}")
    data["formatted_share"] = data["Share"].map(lambda x: f"{x:.1%}")

    fig = px.bar(
        data,
        x="Subtotal",
        y="Subscription",
        orientation="h",
        text="formatted_subtotal",
        color_discrete_sequence=[TOKENS.brand_blue],
    )

    fig.update_traces(
        customdata=data[["Occurrences", "formatted_share"]].to_numpy(),
        hovertemplate=(
            "%{y}<br>Subtotal: %{text}<br>Payments: %{customdata[0]}<br>"
            "Share: %{customdata[1]}<extra></extra>"
        ),
        textposition="outside",
        cliponaxis=False,
    )

    fig.update_layout(
        margin=dict(l=0, r=10, t=20, b=0),
        xaxis=dict(title="Subtotal", showgrid=True, gridcolor=TOKENS.neutral_background, zeroline=False),
        yaxis=dict(title="", automargin=True),
        bargap=0.35,
        height=max(240, 48 * len(data)),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )

    return fig


def build_share_chart(breakdown_df: pd.DataFrame) -> go.Figure:
    """Render a donut chart of each subscription's share of the period total."""

    if breakdown_df.empty:
        return _empty_plotly_figure("Nothing to compare yet.")

    palette = list(TOKENS.share_palette)
    data = breakdown_df.sort_values("Subtotal", ascending=False).reset_index(drop=True)
    repeats = (len(data) // len(palette)) + 1
    color_sequence = (palette * repeats)[: len(data)]

    fig = px.pie(
        data,
        names="Subscription",
        values="Subtotal",
        hole=0.55,
        color="Subscription",
        color_discrete_sequence=color_sequence,
    )

    fig.update_traces(
        textposition="inside",
        texttemplate="%{percent:.0%}",
        marker=dict(line=dict(color=TOKENS.neutral_white, width=2)),
    )

    fig.update_layout(
        margin=dict(l=0, r=0, t=0, b=0),
        legend=dict(
            title="",
            orientation="v",
            yanchor="middle",
            y=0.5,
            xanchor="left",
            x=1.05,
            font=dict(color=TOKENS.label_color, family=TOKENS.label_font, size=TOKENS.label_size),
        ),
        showlegend=True,
    )

    return fig
