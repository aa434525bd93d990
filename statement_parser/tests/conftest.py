"""Shared fixtures for the statement parser tests."""
from datetime import date

import pytest

from ..models.schema import StatementPeriod


SAMPLE_STATEMENT = """\
ACME BANK CARD SERVICES
STATEMENT PERIOD: Dec 20, 2023 to Jan 19, 2024
Account summary
DEC 01 DEC 02 $99.99LINE BEFORE ANY CARD
1234 56XX XXXX 7890
Trans Post Amount Description
DEC 22 DEC 23-$45.67NETFLIX
DEC 28 DEC 29 $120.00GROCERY MART
JAN 05 JAN 06 $9.99SPOTIFY
Subtotal $84.32
9876 54XX XXXX 3210
JAN 02 JAN 03 $15.00COFFEE HOUSE
1234 56XX XXXX 7890
JAN 10 JAN 11 $30.00BOOKSTORE
Page 2 of 2
"""


@pytest.fixture
def sample_text():
    """Two-card statement whose period crosses New Year."""
    return SAMPLE_STATEMENT


@pytest.fixture
def cross_year_period():
    return StatementPeriod(start=date(2023, 12, 20), end=date(2024, 1, 19))


@pytest.fixture
def march_period():
    return StatementPeriod(start=date(2024, 3, 1), end=date(2024, 3, 31))
