import streamlit as st
import pandas as pd
from typing import List, Optional
from pydantic import ValidationError

from data import add_card, update_card, delete_card
from models import Card, CARD_VARIANTS

def cards_crud_section(cards: List[Card], currency: str) -> Optional[List[Card]]:
    st.markdown("### Your Cards")
    if cards:
        rows = [{
            "id": c.id, "Card": c.card_name, "Bank": c.bank_name, "Variant": c.card_variant,
            "Last 4": c.last4_digits, "Due Day": c.due_day, "Statement Day": c.statement_day,
            f"Annual Fee ({currency})": c.annual_fee, f"Limit ({currency})": c.credit_limit,
            "Bills": len(c.bills), "Trackers": len(c.spend_trackers),
        } for c in cards]
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
    else:
        st.info("No cards yet. Add one below.")

    st.markdown("### Add / Update")
    with st.form("card_form", clear_on_submit=True):
        c1, c2, c3 = st.columns([2, 1, 1])
        name = c1.text_input("Card Name (e.g., Regalia, Amazon Pay)")
        bank = c2.text_input("Bank")
        variant = c3.selectbox("Variant", CARD_VARIANTS, index=len(CARD_VARIANTS) - 1)
        last4 = c1.text_input("Last 4 digits", max_chars=4)
        due_day = c2.number_input("Due Day", min_value=1, max_value=31, value=5)
        statement_day = c3.number_input("Statement Day", min_value=1, max_value=31, value=15)
        annual_fee = c2.number_input(f"Annual Fee ({currency})", min_value=0.0, value=0.0, step=100.0, format="%.2f")
        credit_limit = c3.number_input(f"Credit Limit ({currency})", min_value=0.0, value=0.0, step=1000.0, format="%.2f")
        waiver = c1.text_input("Fee waiver criteria")
        with st.expander("Perks & notes", expanded=False):
            perks = st.text_area("Perks (comma-separated)", value="")
            extra_info = st.text_area("Extra info", value="")
            color = st.color_picker("Color", value="#4f46e5")

        row_id = st.text_input("Existing ID (optional for update)", value="")
        ok = st.form_submit_button("Save")

        if ok:
            try:
                new = Card(
                    card_name=name.strip(),
                    bank_name=bank.strip(),
                    card_variant=variant,
                    last4_digits=last4.strip(),
                    due_day=int(due_day),
                    statement_day=int(statement_day),
                    annual_fee=round(float(annual_fee), 2),
                    credit_limit=round(float(credit_limit), 2) or None,
                    fee_waiver_criteria=waiver.strip(),
                    perks=[p.strip() for p in perks.split(",") if p.strip()],
                    color=color,
                    extra_info=extra_info.strip(),
                )
            except ValidationError as e:
                st.error(f"Card not saved: {e}")
                return None
            if not new.card_name:
                st.error("Card name is required.")
                return None
            if row_id.strip():
                new.id = row_id.strip()
                try:
                    return update_card(cards, new)
                except KeyError as e:
                    st.error(str(e))
                    return None
            return add_card(cards, new)

    if cards:
        del_id = st.selectbox("Delete card (select ID)", options=[""] + [c.id for c in cards],
                              format_func=lambda i: next((f"{c.card_name} ({c.id})" for c in cards if c.id == i), ""))
        if del_id and st.button("Delete selected card", type="primary"):
            return delete_card(cards, del_id)
    return None
