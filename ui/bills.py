import streamlit as st
import pandas as pd
from datetime import date as _date
from typing import List, Optional
from pydantic import ValidationError

from data import add_bill, update_bill, delete_bill, get_card
from helpers import normalize_bills_csv, statement_month, next_bill_due_date, bill_for_month
from models import Bill, Card

def bills_section(cards: List[Card], ref_date: _date, currency: str) -> Optional[List[Card]]:
    if not cards:
        st.info("Add at least one card to record bills.")
        return None

    card_id = st.selectbox("Card", [c.id for c in cards], key="bills_card",
                           format_func=lambda i: get_card(cards, i).card_name)
    card = get_card(cards, card_id)

    if card.bills:
        rows = [{
            "id": b.id, "Statement Month": b.month, "Due Date": b.due_date,
            f"Amount ({currency})": round(b.amount, 2), "Paid": b.paid,
            "Payment Date": b.payment_date, "Notes": b.notes,
        } for b in card.bills]
        st.dataframe(
            pd.DataFrame(rows), use_container_width=True, hide_index=True,
            column_config={f"Amount ({currency})": st.column_config.NumberColumn(format=f"{currency}%,.2f")}
        )
    else:
        st.info(f"No bills recorded for {card.card_name} yet.")

    st.markdown("### Add / Update Bill")
    due_default = _date(ref_date.year, ref_date.month, 1)
    if card.bills:
        due_default = next_bill_due_date(card.bills[0].due_date)
    with st.form("bill_form", clear_on_submit=True):
        c1, c2, c3 = st.columns([1, 1, 1])
        due_dt = c1.date_input("Due Date", value=due_default)
        amount = c2.number_input(f"Amount ({currency})", value=0.0, step=0.01, format="%.2f",
                                 help="Negative for credits / refunds")
        paid = c3.checkbox("Paid")
        payment_dt = c3.date_input("Payment Date", value=None)
        notes = st.text_input("Notes", value="")
        ok = st.form_submit_button("Save")
        if ok:
            month = statement_month(due_dt)
            existing = bill_for_month(card, month)
            fields = {
                "month": month, "amount": round(float(amount), 2), "due_date": due_dt,
                "paid": bool(paid), "payment_date": payment_dt if paid else None, "notes": notes.strip(),
            }
            if existing:
                fields["id"] = existing.id
            try:
                bill = Bill(**fields)
            except ValidationError as e:
                st.error(f"Bill not saved: {e}")
                return None
            if existing:
                st.caption(f"Updated the existing bill for {month}.")
                return update_bill(cards, card.id, bill)
            return add_bill(cards, card.id, bill)

    with st.expander("Import bills from CSV", expanded=False):
        file = st.file_uploader("Upload bills CSV", type=["csv"], key="bills_csv")
        if not file:
            st.info("CSV must include: Due date, Amount. Optional: Month, Paid, Payment date, Notes.")
        else:
            imported = normalize_bills_csv(file)
            if imported is None:
                st.error("CSV invalid or missing required columns.")
            elif st.button(f"Import {len(imported)} bill(s) into {card.card_name}"):
                updated = cards
                for b in imported:
                    updated = add_bill(updated, card.id, b)
                return updated

    if card.bills:
        del_id = st.selectbox("Delete bill (select ID)", options=[""] + [b.id for b in card.bills],
                              format_func=lambda i: next((f"{b.month} ({b.id})" for b in card.bills if b.id == i), ""))
        if del_id and st.button("Delete selected bill", type="primary"):
            return delete_bill(cards, card.id, del_id)
    return None
