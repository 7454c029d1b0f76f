"""Domain Types — verifies money conversion and enum values.

Tests:
    - to_cents is exact for two-decimal amounts (no float drift)
    - to_cents rounds half up beyond two decimals
    - format_currency renders cents as dollars
    - InvoiceStatus has exactly pending/paid
    - action-state messages match the user-facing strings
"""

from decimal import Decimal

import pytest

from invoicer.core.action_state import (
    ActionState, database_error_message, storage_failed, invoice_not_found,
)
from invoicer.core.auth_messages import auth_failure_message
from invoicer.core.domain_types import (
    AuthFailureType, InvoiceAction, InvoiceStatus, format_currency, to_cents,
)


@pytest.mark.parametrize("amount,cents", [
    ("19.99", 1999),
    ("0.01", 1),
    ("0.29", 29),
    ("1.15", 115),
    ("100", 10000),
    ("4.35", 435),
])
def test_to_cents_is_exact_for_two_decimals(amount, cents):
    assert to_cents(Decimal(amount)) == cents


def test_to_cents_rounds_half_up():
    assert to_cents(Decimal("1.005")) == 101
    assert to_cents(Decimal("1.004")) == 100


def test_format_currency():
    assert format_currency(1999) == "$19.99"
    assert format_currency(0) == "$0.00"
    assert format_currency(123456789) == "$1,234,567.89"


def test_invoice_status_has_two_states():
    assert {s.value for s in InvoiceStatus} == {"pending", "paid"}


def test_database_error_messages():
    assert database_error_message("Create") == "Database Error: Failed to Create Invoice."
    assert storage_failed(InvoiceAction.UPDATE).message == (
        "Database Error: Failed to Update Invoice."
    )
    assert storage_failed("Delete").message == "Database Error: Failed to Delete Invoice."


def test_failed_states_do_not_succeed():
    assert not storage_failed(InvoiceAction.CREATE).succeeded
    assert not invoice_not_found("Delete").succeeded
    assert ActionState(redirect_to="/x").succeeded


def test_auth_failure_messages():
    assert auth_failure_message(AuthFailureType.CREDENTIALS_SIGNIN) == "Invalid credentials."
    assert auth_failure_message(AuthFailureType.CONFIGURATION) == "Something went wrong."
    assert auth_failure_message(AuthFailureType.ACCESS_DENIED) == "Something went wrong."
