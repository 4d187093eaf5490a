# data.py
# Local JSON persistence of cards (with their bills and spend trackers) and settings

import json
import logging
from typing import Any, Dict, List
from pathlib import Path

from pydantic import ValidationError

import config
from config import LOG_LEVEL, EMPTY_CARDS, DEFAULT_SETTINGS
from models import Bill, Card, SpendTracker

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

def _ensure_dir():
    config.DATA_DIR.mkdir(parents=True, exist_ok=True)

def _read_json(path: Path, default):
    _ensure_dir()
    if not path.exists():
        return json.loads(json.dumps(default))
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read {path.name}, using defaults: {e}")
        return json.loads(json.dumps(default))

def _write_json(path: Path, obj):
    _ensure_dir()
    tmp = path.with_suffix(".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)
    tmp.replace(path)

def load_cards() -> List[Card]:
    cards = []
    for raw in _read_json(config.CARDS_FILE, EMPTY_CARDS):
        try:
            cards.append(Card.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping invalid card {raw.get('id', '?')}: {e}")
    return _sorted_cards(cards)

def save_cards(cards: List[Card]) -> None:
    _write_json(config.CARDS_FILE, [c.model_dump(mode="json") for c in cards])

def load_settings() -> Dict[str, Any]:
    settings = dict(DEFAULT_SETTINGS)
    settings.update(_read_json(config.SETTINGS_FILE, DEFAULT_SETTINGS))
    return settings

def save_settings(settings: Dict[str, Any]) -> None:
    _write_json(config.SETTINGS_FILE, settings)

# ---------- Card-level edits (return a new list; callers save) ----------
def _sorted_cards(cards: List[Card]) -> List[Card]:
    return sorted(cards, key=lambda c: c.card_name.lower())

def _sorted_bills(bills: List[Bill]) -> List[Bill]:
    return sorted(bills, key=lambda b: b.due_date, reverse=True)

def _find(items, item_id: str, kind: str):
    for i, item in enumerate(items):
        if item.id == item_id:
            return i
    raise KeyError(f"{kind} {item_id!r} not found")

def _replace_card(cards: List[Card], card: Card) -> List[Card]:
    i = _find(cards, card.id, "Card")
    updated = list(cards)
    updated[i] = card
    return _sorted_cards(updated)

def get_card(cards: List[Card], card_id: str) -> Card:
    return cards[_find(cards, card_id, "Card")]

def add_card(cards: List[Card], card: Card) -> List[Card]:
    return _sorted_cards(list(cards) + [card])

def update_card(cards: List[Card], card: Card) -> List[Card]:
    """Replace a card's details, keeping its bills and trackers."""
    current = get_card(cards, card.id)
    merged = card.model_copy(update={"bills": current.bills, "spend_trackers": current.spend_trackers})
    return _replace_card(cards, merged)

def delete_card(cards: List[Card], card_id: str) -> List[Card]:
    _find(cards, card_id, "Card")
    return [c for c in cards if c.id != card_id]

def add_bill(cards: List[Card], card_id: str, bill: Bill) -> List[Card]:
    card = get_card(cards, card_id)
    bills = _sorted_bills(card.bills + [bill])
    return _replace_card(cards, card.model_copy(update={"bills": bills}))

def update_bill(cards: List[Card], card_id: str, bill: Bill) -> List[Card]:
    card = get_card(cards, card_id)
    bills = list(card.bills)
    bills[_find(bills, bill.id, "Bill")] = bill
    return _replace_card(cards, card.model_copy(update={"bills": _sorted_bills(bills)}))

def delete_bill(cards: List[Card], card_id: str, bill_id: str) -> List[Card]:
    card = get_card(cards, card_id)
    _find(card.bills, bill_id, "Bill")
    bills = [b for b in card.bills if b.id != bill_id]
    return _replace_card(cards, card.model_copy(update={"bills": bills}))

def add_tracker(cards: List[Card], card_id: str, tracker: SpendTracker) -> List[Card]:
    card = get_card(cards, card_id)
    trackers = card.spend_trackers + [tracker]
    return _replace_card(cards, card.model_copy(update={"spend_trackers": trackers}))

def update_tracker(cards: List[Card], card_id: str, tracker: SpendTracker) -> List[Card]:
    card = get_card(cards, card_id)
    trackers = list(card.spend_trackers)
    trackers[_find(trackers, tracker.id, "Tracker")] = tracker
    return _replace_card(cards, card.model_copy(update={"spend_trackers": trackers}))

def delete_tracker(cards: List[Card], card_id: str, tracker_id: str) -> List[Card]:
    card = get_card(cards, card_id)
    _find(card.spend_trackers, tracker_id, "Tracker")
    trackers = [t for t in card.spend_trackers if t.id != tracker_id]
    return _replace_card(cards, card.model_copy(update={"spend_trackers": trackers}))
