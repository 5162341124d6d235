"""
IT Operations — Interactive Dashboard

Run with:  streamlit run app.py
"""

import sys
from datetime import date
from pathlib import Path

import streamlit as st
import plotly.graph_objects as go
import pandas as pd

sys.path.insert(0, str(Path(__file__).resolve().parent))

from itops_dashboard.config import REFRESH_INTERVAL, ROW_MATERIAL_CAPACITY, ENTER_LOCK_WEEKLY_CAPACITY
from itops_dashboard.dashboard import (
    STATUS_PANELS,
    describe_relative_date,
    get_daily_breakdown,
    get_daily_overview,
    get_weekly_bins_trend,
    get_weekly_insights,
    get_weekly_status_tables,
    get_weekly_summary,
    get_weekly_wifi_usage,
)
from itops_dashboard.simulator import generate_sheets
from itops_dashboard.state import DashboardState

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="IT Daily Report Dashboard",
    page_icon="🖥️",
    layout="wide",
    initial_sidebar_state="expanded",
)

STATUS_COLORS = {
    "good": "#2ecc71",
    "warning": "#f39c12",
    "bad": "#e74c3c",
}

SEVERITY_COLORS = {
    "Good": "#2ecc71",
    "Warning": "#f39c12",
    "Critical": "#e74c3c",
}


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------
st.sidebar.title("IT Operations")
st.sidebar.markdown("Daily & Weekly Status Dashboard")
st.sidebar.divider()

use_demo = st.sidebar.toggle("Use demo data", value=False)
state_key = "dashboard_demo" if use_demo else "dashboard"
if state_key not in st.session_state:
    st.session_state[state_key] = DashboardState(loader=generate_sheets) if use_demo else DashboardState()
state: DashboardState = st.session_state[state_key]


@st.fragment(run_every=REFRESH_INTERVAL)
def auto_refresh() -> None:
    # Timer-driven: reruns the whole page once the data has gone stale
    if state.is_stale(REFRESH_INTERVAL):
        st.rerun()


if st.sidebar.button("Refresh") or state.is_stale(REFRESH_INTERVAL):
    with st.spinner("Fetching sheets..."):
        result = state.refresh()
    if result.all_failed:
        st.error("Failed to fetch data from Google Sheets. Check that the sheets are published.")
        auto_refresh()
        st.stop()

auto_refresh()

page = st.sidebar.radio("Navigate", ["Daily Report", "Weekly Report"])

st.sidebar.divider()
if state.last_updated:
    st.sidebar.caption(f"Last update: {state.last_updated:%A, %B %d, %Y %H:%M:%S}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def gauge(pct: float, color: str, center_text: str | None = None, half: bool = False) -> go.Figure:
    fig = go.Figure(go.Pie(
        values=[pct, 100 - pct],
        hole=0.7 if half else 0.75,
        marker_colors=[color, "#e0e0e0"],
        sort=False,
        direction="clockwise",
        rotation=270 if half else 0,
        textinfo="none",
        hoverinfo="skip",
    ))
    fig.update_layout(
        showlegend=False,
        height=220,
        margin=dict(l=10, r=10, t=10, b=10),
        annotations=[dict(text=center_text, showarrow=False, font=dict(size=24))] if center_text else [],
    )
    return fig


def status_tiles(items: pd.DataFrame) -> None:
    if items.empty:
        st.caption("No data")
        return
    cols = st.columns(min(len(items), 4))
    for i, row in enumerate(items.itertuples(index=False)):
        color = STATUS_COLORS.get(row.status_class, STATUS_COLORS["warning"])
        with cols[i % len(cols)]:
            st.markdown(
                f"<div style='border-left: 4px solid {color}; background: {color}15; "
                f"border-radius: 6px; padding: 8px 12px; margin-bottom: 6px;'>"
                f"<div style='font-weight: 600;'>{row.name}</div>"
                f"<div style='color: {color};'>{row.status}</div></div>",
                unsafe_allow_html=True,
            )


def color_status(val):
    color = STATUS_COLORS.get(val, "#333")
    return f"background-color: {color}22; color: {color}"


# ===========================================================================
# PAGE: Daily Report
# ===========================================================================
if page == "Daily Report":
    st.title("IT Daily Report")

    col_date, col_reset = st.columns([3, 1])
    with col_date:
        picked = st.date_input("Date", value=date.fromisoformat(state.selected_date))
    with col_reset:
        st.write("")
        if st.button("Today"):
            state.reset_date()
            st.rerun()
    if picked.isoformat() != state.selected_date:
        state.select_date(picked)

    st.caption(f"**{state.selected_date}** ({describe_relative_date(state.selected_date)})")

    notice = state.availability()
    if notice is not None:
        st.warning(f"**{notice.title}**\n\n{notice.message}")
        st.stop()

    overview = get_daily_overview(state.filtered)

    # Bins and row materials
    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Damaged Bins")
        bins = overview["bins"]
        if bins:
            st.plotly_chart(gauge(bins["pct"], "#dc3545", half=True), use_container_width=True)
            st.markdown(f"**{bins['label']}** — {bins['pct']:.1f}% Damaged (EnterLock WH)")
        else:
            st.caption("No data")
    with col2:
        st.subheader("Row Materials")
        materials = overview["row_materials"]
        if not materials.empty:
            fig = go.Figure(go.Pie(
                labels=[f"{r['issue']} ({r['count']})" for _, r in materials.iterrows()],
                values=materials["pct"],
                hole=0.5,
                marker_colors=["#FF6384", "#36A2EB", "#FFCE56"],
            ))
            fig.update_layout(height=260, margin=dict(l=10, r=10, t=10, b=10))
            st.plotly_chart(fig, use_container_width=True)
            st.markdown(f"**Total: {int(materials['count'].sum())}/{ROW_MATERIAL_CAPACITY}**")
        else:
            st.caption("No row material issues")

    st.divider()

    # Network
    st.subheader("Network")
    network = overview["network"]
    cols = st.columns(len(network["routers"]) + 1)
    for i, router in enumerate(network["routers"]):
        with cols[i]:
            st.markdown(f"**{router['name']}**")
            st.plotly_chart(
                gauge(router["pct"], "#4A90E2", f"{round(router['pct'])}%"),
                use_container_width=True,
            )
            st.caption(f"{router['gb']} GB" if network["has_data"] else "--")
    with cols[-1]:
        upload = network["upload_mbps"]
        download = network["download_mbps"]
        st.metric("Upload", f"{upload} Mbps" if upload else "--")
        st.metric("Download", f"{download} Mbps" if download else "--")
        cameras = overview["cameras"]
        if cameras:
            st.metric("Cameras Working", cameras["working"])
            st.metric("Cameras Down", cameras["down"])

    # WiFi coverage
    coverage = overview["wifi_coverage"]
    if not coverage.empty:
        st.subheader("WiFi Coverage")
        cols = st.columns(min(len(coverage), 4))
        for i, row in enumerate(coverage.itertuples(index=False)):
            with cols[i % len(cols)]:
                st.metric(row.area, f"{row.coverage:g}%")

    st.divider()

    for sheet_name, label in STATUS_PANELS.items():
        st.subheader(label)
        status_tiles(overview[sheet_name])


# ===========================================================================
# PAGE: Weekly Report
# ===========================================================================
elif page == "Weekly Report":
    st.title("IT Weekly Report")

    days, weekly = state.week()
    st.caption(state.week_label())

    if not days:
        st.info("IT checks are not performed on Fridays and Saturdays.")
        st.stop()

    trend = get_weekly_bins_trend(weekly, days)
    latest = trend.iloc[-1]

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Damaged Enterlock", int(latest["enter_lock"]))
    col2.metric("Spring Repair", int(latest["spring_repair"]))
    col3.metric("Scanning Issues", int(latest["scanning_issue"]))
    col4.metric("Need Cement", int(latest["cement"]))

    col1, col2 = st.columns(2)
    with col1:
        fig = go.Figure(go.Scatter(
            x=trend["label"], y=trend["enter_lock"],
            name="Damaged Enterlock Bins",
            mode="lines+markers",
            line=dict(color="#dc3545", width=3, shape="spline"),
            fill="tozeroy",
            fillcolor="rgba(220, 53, 69, 0.2)",
        ))
        fig.update_layout(
            title="Damaged Enterlock Bins",
            yaxis=dict(title="Number of Bins", range=[0, 49]),
            height=350,
            plot_bgcolor="rgba(0,0,0,0)",
        )
        st.plotly_chart(fig, use_container_width=True)
    with col2:
        fig = go.Figure()
        for column, label, color in [
            ("spring_repair", "Spring Repair", "#FF6384"),
            ("scanning_issue", "Scanning Issues", "#36A2EB"),
            ("cement", "Need Cement", "#FFCE56"),
        ]:
            fig.add_trace(go.Scatter(
                x=trend["label"], y=trend[column],
                name=label, mode="lines+markers",
                line=dict(color=color, shape="spline"),
            ))
        fig.update_layout(
            title="Row Material Issues",
            yaxis_title="Number of Bins",
            height=350,
            plot_bgcolor="rgba(0,0,0,0)",
        )
        st.plotly_chart(fig, use_container_width=True)

    usage = get_weekly_wifi_usage(weekly, days)
    fig = go.Figure(go.Bar(
        x=usage["label"], y=usage["usage_gb"],
        name="Daily WiFi Usage",
        marker_color="rgba(29, 185, 232, 0.8)",
        text=usage["usage_gb"].apply(lambda x: f"{x:.2f} GB"),
        textposition="outside",
    ))
    fig.update_layout(
        title="Daily WiFi Usage",
        yaxis_title="Usage (GB)",
        xaxis_title="Date",
        height=350,
        plot_bgcolor="rgba(0,0,0,0)",
    )
    st.plotly_chart(fig, use_container_width=True)

    st.divider()

    col1, col2 = st.columns([1, 2])
    with col1:
        st.subheader("Weekly Summary")
        summary = get_weekly_summary(weekly, days)
        st.dataframe(summary[["metric", "value"]].astype(str), use_container_width=True, hide_index=True)
    with col2:
        st.subheader("Key Insights")
        for insight in get_weekly_insights(weekly, days):
            st.markdown(f"- {insight['text']}")

    st.subheader("Latest Status")
    tables = get_weekly_status_tables(weekly, days)
    tabs = st.tabs(["Services", "Virtual Machines", "Forklifts", "Security"])
    for tab, sheet_name in zip(tabs, tables):
        with tab:
            table = tables[sheet_name]
            if table.empty:
                st.caption("No data")
            else:
                st.dataframe(
                    table.style.map(color_status, subset=["status_class"]),
                    use_container_width=True,
                    hide_index=True,
                )

    st.subheader("Daily Breakdown")
    breakdown = get_daily_breakdown(weekly, days)
    cols = st.columns(len(breakdown))
    for col, row in zip(cols, breakdown.itertuples(index=False)):
        color = SEVERITY_COLORS[row.severity]
        with col:
            st.markdown(
                f"<div style='border-top: 3px solid {color}; padding: 8px; background: {color}10; border-radius: 6px;'>"
                f"<div style='font-weight: 600;'>{row.day_name}</div>"
                f"<div style='color: {color};'>{row.severity} · {row.enter_lock_pct}% Full</div>"
                f"<div>Damaged Enterlock: {row.enter_lock} / {ENTER_LOCK_WEEKLY_CAPACITY}</div>"
                f"<div>Spring Repair: {row.spring_repair}</div>"
                f"<div>Scanning Issues: {row.scanning_issue}</div>"
                f"<div>Need Cement: {row.cement}</div>"
                f"<div><b>Total Row Material: {row.row_material_total}</b></div></div>",
                unsafe_allow_html=True,
            )
