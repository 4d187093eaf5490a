import streamlit as st
from typing import List

from helpers import compare_cards
from models import Card

def compare_section(cards: List[Card], currency: str) -> None:
    if not cards:
        st.info("You have no cards to compare. Add some cards to get started.")
        return

    names = [c.card_name for c in cards]
    chosen = st.multiselect("Cards to compare", options=list(range(len(cards))), default=list(range(len(cards))),
                            format_func=lambda i: names[i], key="compare_cards")
    if not chosen:
        st.info("Select at least one card.")
        return
    table = compare_cards([cards[i] for i in chosen], currency)
    st.dataframe(table, use_container_width=True)
