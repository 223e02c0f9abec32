from decimal import Decimal

import pytest

from db import NO_ROWS, DatabaseError, TuitionRates, UserTuitionRecord
from main_server import AppState, create_app


class FakeTuitionDatabase:
    """In-memory stand-in for TuitionDatabase with the same call surface."""

    def __init__(self):
        self.rates = {
            ("undergraduate", "resident"): TuitionRates(Decimal("300.00"), Decimal("0.00")),
            ("undergraduate", "nonresident"): TuitionRates(Decimal("300.00"), Decimal("500.00")),
            ("graduate", "resident"): TuitionRates(Decimal("450.00"), Decimal("0.00")),
            ("graduate", "nonresident"): TuitionRates(Decimal("450.00"), Decimal("750.00")),
        }
        self.orientation_fee = Decimal("150.00")
        self.records = {}
        self.writes = 0
        self.rate_queries = []

    def fetch_tuition_rates(self, studies, residency):
        key = (studies.value, residency.value)
        self.rate_queries.append(key)
        if key not in self.rates:
            raise DatabaseError(NO_ROWS)
        return self.rates[key]

    def fetch_orientation_fee(self):
        if self.orientation_fee is None:
            raise DatabaseError(NO_ROWS)
        return self.orientation_fee

    def fetch_user_tuition(self, first_name, last_name):
        try:
            cost = self.records[(first_name, last_name)]
        except KeyError:
            raise DatabaseError(NO_ROWS)
        return UserTuitionRecord(first_name, last_name, cost)

    def save_user_tuition(self, first_name, last_name, tuition_cost):
        self.writes += 1
        created = (first_name, last_name) not in self.records
        self.records[(first_name, last_name)] = tuition_cost
        return created


@pytest.fixture
def fake_db():
    return FakeTuitionDatabase()


@pytest.fixture
def app(fake_db):
    app = create_app(AppState(app_name="Tuition Calculator", db=fake_db))
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def calc_form():
    return {
        "first_name": "Alice",
        "last_name": "Smith",
        "num_credits": "12",
        "student_type": "nonresident",
        "student_studies": "undergraduate",
    }
