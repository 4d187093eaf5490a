from datetime import date
from enum import Enum
from typing import List, Literal, Optional
from uuid import uuid4

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, Field, model_validator

CARD_VARIANTS = (
    "Visa", "Visa Signature", "Visa Infinite", "Mastercard",
    "American Express", "Discover", "RuPay", "Maestro", "Other",
)
CardVariant = Literal[
    "Visa", "Visa Signature", "Visa Infinite", "Mastercard",
    "American Express", "Discover", "RuPay", "Maestro", "Other",
]


class RecurrenceType(str, Enum):
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    ANNUAL = "Annual"


class Bill(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    month: str = ""
    amount: float
    due_date: date
    paid: bool = False
    payment_date: Optional[date] = None
    notes: str = ""

    @model_validator(mode="after")
    def _default_month(self):
        # The statement is generated the month before the bill falls due
        if not self.month:
            self.month = (self.due_date - relativedelta(months=1)).strftime("%B %Y")
        return self


class SpendTracker(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    type: RecurrenceType
    target_amount: float = Field(ge=0)
    start_date: date


class Card(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    card_name: str
    bank_name: str = ""
    card_variant: CardVariant = "Other"
    last4_digits: str = ""
    due_day: int = Field(default=1, ge=1, le=31)
    statement_day: Optional[int] = Field(default=None, ge=1, le=31)
    annual_fee: float = 0.0
    credit_limit: Optional[float] = None
    fee_waiver_criteria: str = ""
    perks: List[str] = Field(default_factory=list)
    color: str = "#4f46e5"
    extra_info: str = ""
    bills: List[Bill] = Field(default_factory=list)
    spend_trackers: List[SpendTracker] = Field(default_factory=list)


class Progress(BaseModel):
    percent: float
    remaining: float
    completed: bool


class TrackerPeriod(BaseModel):
    label: str
    start: date
    end: date
    spend: float
    target: float
    progress: Progress
