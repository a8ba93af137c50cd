"""
Formatting and classification helpers shared by services and schemas
"""
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

CRITICAL_STOCK_LEVEL = 5
LAKH = Decimal("100000")


def round_half_up(value) -> int:
    """Round to the nearest integer, halves away from zero"""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_lakhs(amount: Decimal) -> str:
    """Render a rupee amount in lakhs with one decimal, e.g. 250000 -> '₹2.5L'"""
    lakhs = (Decimal(amount) / LAKH).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"₹{lakhs}L"


# ==================== STOCK ====================

def is_low_stock(quantity: int, threshold: int) -> bool:
    return quantity <= threshold


def is_critical_stock(quantity: int) -> bool:
    return quantity <= CRITICAL_STOCK_LEVEL


def stock_status(quantity: int, threshold: int) -> str:
    if is_critical_stock(quantity):
        return "Critical"
    if is_low_stock(quantity, threshold):
        return "Low Stock"
    return "In Stock"


# ==================== DUE DATES ====================

def is_overdue(due_date: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if due_date is None:
        return False
    now = now or datetime.utcnow()
    return now > due_date


def _describe_distance(delta_seconds: float) -> str:
    minutes = int(delta_seconds // 60)
    if minutes < 1:
        return "less than a minute"
    if minutes < 60:
        return f"{minutes} minute{'s' if minutes != 1 else ''}"
    hours = minutes // 60
    if hours < 24:
        return f"{hours} hour{'s' if hours != 1 else ''}"
    days = hours // 24
    if days < 30:
        return f"{days} day{'s' if days != 1 else ''}"
    months = days // 30
    if months < 12:
        return f"{months} month{'s' if months != 1 else ''}"
    years = days // 365
    return f"{max(years, 1)} year{'s' if years > 1 else ''}"


def due_date_text(due_date: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Human readable due date, e.g. 'Overdue by 3 days' or 'Due in 2 hours'"""
    if due_date is None:
        return "No due date"
    now = now or datetime.utcnow()
    if is_overdue(due_date, now):
        return f"Overdue by {_describe_distance((now - due_date).total_seconds())}"
    return f"Due in {_describe_distance((due_date - now).total_seconds())}"
