import streamlit as st
from datetime import date as _date
from typing import List

from helpers import yearly_summary
from models import Card

def yearly_summary_section(cards: List[Card], today: _date, currency: str) -> None:
    if not cards:
        st.info("You have no cards to display. Add some cards to get started.")
        return

    years = [today.year - i for i in range(5)]
    year = st.selectbox("Year", years, index=0, key="summary_year")
    g = yearly_summary(cards, year)
    st.dataframe(g.style.format(f"{currency}{{:,.2f}}"), use_container_width=True)
    st.markdown(f"**Grand total for {year}: {currency}{float(g.loc['Total'].sum()):,.2f}**")
