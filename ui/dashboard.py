import streamlit as st
import pandas as pd
from datetime import date as _date
from typing import List

from helpers import dashboard_stats, upcoming_bills, monthly_bill_totals
from models import Card
from spend import current_tracker_progress

def dashboard_section(cards: List[Card], today: _date, currency: str) -> None:
    if not cards:
        st.info("Add a card to see your dashboard.")
        return

    stats = dashboard_stats(cards, today)
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Total Outstanding", f"{currency}{stats['total_outstanding']:,.0f}", help="Across all cards")
    m2.metric("Upcoming Bills", stats["upcoming_bills_count"])
    m3.metric("Due in 7 days", stats["cards_due_soon"])
    m4.metric("Paid This Month", f"{currency}{stats['total_paid_this_month']:,.0f}")

    st.markdown("### Upcoming Bills")
    rows = upcoming_bills(cards, today)
    if rows:
        st.dataframe(pd.DataFrame([{
            "Card": r["card_name"] + (f" ••{r['last4_digits']}" if r["last4_digits"] else ""),
            "Statement Month": r["bill"].month,
            "Due Date": r["bill"].due_date,
            f"Amount ({currency})": round(r["bill"].amount, 2),
            "Status": r["urgency"] or "",
        } for r in rows]), use_container_width=True, hide_index=True)
    else:
        st.success("No outstanding bills. 🎉")

    st.markdown("### Monthly Bills by Card")
    g = monthly_bill_totals(cards)
    if g is None or g.empty:
        st.info("No bill amounts to chart yet.")
    else:
        selected = st.multiselect("Cards", options=list(g.columns), default=list(g.columns), key="dash_cards")
        if selected:
            st.line_chart(g[selected])

    st.markdown("### Spend Trackers — current period")
    tracker_rows = []
    for c in cards:
        for t in c.spend_trackers:
            snap = current_tracker_progress(t, c.bills, today)
            tracker_rows.append({
                "Card": c.card_name, "Tracker": t.name, "Type": t.type.value, "Period": snap.label,
                f"Spend ({currency})": snap.spend, f"Target ({currency})": snap.target,
                "Progress": min(max(snap.progress.percent, 0.0), 100.0),
                f"Remaining ({currency})": snap.progress.remaining,
            })
    if tracker_rows:
        st.dataframe(
            pd.DataFrame(tracker_rows), use_container_width=True, hide_index=True,
            column_config={"Progress": st.column_config.ProgressColumn(format="%.0f%%", min_value=0, max_value=100)}
        )
    else:
        st.info("No spend trackers yet.")
