import streamlit as st
from datetime import date as _date
from typing import List, Optional
from pydantic import ValidationError

from data import add_tracker, update_tracker, delete_tracker, get_card
from models import Card, RecurrenceType, SpendTracker
from navigator import TrackerNavigator
from periods import calendar_period_start
from spend import period_history

def _tracker_card(tracker: SpendTracker, card: Card, today: _date, currency: str) -> None:
    key = f"period::{tracker.id}"
    nav = TrackerNavigator(tracker, card.bills, today, period_start=st.session_state.get(key))

    c1, c2, c3, c4 = st.columns([3, 1, 2, 1])
    c1.markdown(f"**{tracker.name}** · {tracker.type.value}")
    if c2.button("◀", key=f"prev::{tracker.id}", help="Previous period"):
        nav.previous()
    if c4.button("▶", key=f"next::{tracker.id}", help="Next period"):
        nav.next()
    if c1.button("Back to current period", key=f"reset::{tracker.id}"):
        nav.reset(today)
    st.session_state[key] = nav.period_start

    snap = nav.view()
    c3.markdown(f"**{snap.label}**")
    st.markdown(f"Spend `{currency}{snap.spend:,.2f}` / `{currency}{snap.target:,.2f}`")
    st.progress(min(max(snap.progress.percent, 0.0), 100.0) / 100.0)
    st.caption(
        f"Start: {snap.start.strftime('%b %d, %Y')} · End: {snap.end.strftime('%b %d, %Y')} · "
        f"Remaining: {currency}{snap.progress.remaining:,.2f}"
        + (" · ✅ Goal reached" if snap.progress.completed else "")
    )

    with st.expander("Spend history", expanded=False):
        hist = period_history(tracker, card.bills, today)
        st.bar_chart(hist.set_index("Period")[["Spend", "Target"]])
        st.dataframe(hist, use_container_width=True, hide_index=True)

def trackers_section(cards: List[Card], today: _date, currency: str) -> Optional[List[Card]]:
    if not cards:
        st.info("Add a card first.")
        return None

    card_id = st.selectbox("Card", [c.id for c in cards], key="trackers_card",
                           format_func=lambda i: get_card(cards, i).card_name)
    card = get_card(cards, card_id)

    if card.spend_trackers:
        for t in card.spend_trackers:
            _tracker_card(t, card, today, currency)
            st.markdown("---")
    else:
        st.info("No spend trackers set up for this card.")

    st.markdown("### Add / Update Tracker")
    rtype = st.radio("Type", [t.value for t in RecurrenceType], index=1, horizontal=True, key="tracker_type")
    with st.form("tracker_form", clear_on_submit=True):
        c1, c2 = st.columns([2, 1])
        name = c1.text_input("Tracker name (e.g., Fee waiver spend)")
        target = c2.number_input(f"Target ({currency})", min_value=0.0, value=0.0, step=1000.0, format="%.2f")
        start = c2.date_input("Start date", value=calendar_period_start(today, rtype),
                              help="Periods repeat from this date")
        row_id = c1.text_input("Existing ID (optional for update)", value="")
        ok = st.form_submit_button("Save")
        if ok:
            if len(name.strip()) < 2:
                st.error("Tracker name is required.")
                return None
            fields = {"name": name.strip(), "type": rtype, "target_amount": round(float(target), 2), "start_date": start}
            if row_id.strip():
                fields["id"] = row_id.strip()
            try:
                tracker = SpendTracker(**fields)
            except ValidationError as e:
                st.error(f"Tracker not saved: {e}")
                return None
            if row_id.strip():
                st.session_state.pop(f"period::{tracker.id}", None)
                try:
                    return update_tracker(cards, card.id, tracker)
                except KeyError as e:
                    st.error(str(e))
                    return None
            return add_tracker(cards, card.id, tracker)

    if card.spend_trackers:
        del_id = st.selectbox("Delete tracker (select ID)", options=[""] + [t.id for t in card.spend_trackers],
                              format_func=lambda i: next((f"{t.name} ({t.id})" for t in card.spend_trackers if t.id == i), ""))
        if del_id and st.button("Delete selected tracker", type="primary"):
            st.session_state.pop(f"period::{del_id}", None)
            return delete_tracker(cards, card.id, del_id)
    return None
