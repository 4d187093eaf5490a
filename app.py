# app.py
# Card Spend Tracker: credit cards, monthly bills and recurring spend goals
# Local JSON persistence under ./data

from datetime import date
import streamlit as st

from data import load_cards, save_cards, load_settings, save_settings
from ui import (
    dashboard_section,
    cards_crud_section,
    bills_section,
    trackers_section,
    yearly_summary_section,
    compare_section,
)

st.set_page_config(page_title="Card Spend Tracker", layout="wide")
st.title("💳 Card Spend Tracker — Cards, Bills & Spend Goals")

# Sidebar: reference date & settings
st.sidebar.header("⚙️ Settings")
today = st.sidebar.date_input("Today (reference date)", value=date.today())
settings = load_settings()
CURRENCIES = ["₹", "$", "€", "£", "¥"]
currency = st.sidebar.selectbox(
    "Currency symbol", CURRENCIES,
    index=CURRENCIES.index(settings["currency"]) if settings["currency"] in CURRENCIES else 0,
)
if currency != settings["currency"]:
    settings["currency"] = currency
    save_settings(settings)

# Load all local state
cards = load_cards()

def _persist(updated, message: str):
    if updated is not None:
        save_cards(updated)
        st.toast(message)
        st.rerun()

tab_dash, tab_cards, tab_bills, tab_trackers, tab_year, tab_compare = st.tabs(
    ["Dashboard", "Cards", "Bills", "Spend Trackers", "Yearly Summary", "Compare"]
)

with tab_dash:
    dashboard_section(cards, today, currency)

with tab_cards:
    _persist(cards_crud_section(cards, currency), "Cards saved.")

with tab_bills:
    _persist(bills_section(cards, today, currency), "Bills saved.")

with tab_trackers:
    _persist(trackers_section(cards, today, currency), "Trackers saved.")

with tab_year:
    yearly_summary_section(cards, today, currency)

with tab_compare:
    compare_section(cards, currency)

st.markdown("---")
st.caption("Data is stored locally under ./data/*.json.")
