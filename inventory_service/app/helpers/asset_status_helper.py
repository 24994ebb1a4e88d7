"""
Operational status derivation for assets.

An asset whose replacement is due between today and six calendar months
from today (both ends inclusive) is reported as "expiring soon", unless it
is already dead or surplus. The functions here are pure; the bulk sweep
lives in ``assets_crud.sweep_expiring_assets``.
"""
from datetime import date
from typing import Optional, Tuple

from dateutil.relativedelta import relativedelta

from ..enum.asset_enum import OperationalStatus

EXPIRY_WINDOW_MONTHS = 6

EXPIRING_SOON = OperationalStatus.expiring_soon.value

EXEMPT_STATUSES = (
    OperationalStatus.dead.value,
    OperationalStatus.surplus.value,
)

# statuses the sweep leaves alone
SWEEP_SKIP_STATUSES = (EXPIRING_SOON,) + EXEMPT_STATUSES


def expiry_horizon(today: Optional[date] = None) -> date:
    today = today or date.today()
    # calendar months, day clamped to month end (Aug 31 -> Feb 28/29)
    return today + relativedelta(months=EXPIRY_WINDOW_MONTHS)


def is_within_expiry_window(due_date: Optional[date], today: Optional[date] = None) -> bool:
    if due_date is None:
        return False
    today = today or date.today()
    return today <= due_date <= expiry_horizon(today)


def _normalise(status: Optional[str]) -> Optional[str]:
    return status.strip().lower() if status is not None else None


def is_exempt_status(status: Optional[str]) -> bool:
    return _normalise(status) in EXEMPT_STATUSES


def resolve_operational_status(
    due_date: Optional[date],
    effective_status: Optional[str],
    today: Optional[date] = None,
) -> Tuple[Optional[str], bool]:
    """
    Return ``(status_to_persist, override_applied)``.

    ``effective_status`` is the status the caller supplied, or the stored one
    when the caller left it out.
    """
    if due_date is None:
        return effective_status, False

    if is_within_expiry_window(due_date, today) and not is_exempt_status(effective_status):
        return EXPIRING_SOON, _normalise(effective_status) != EXPIRING_SOON

    return effective_status, False
