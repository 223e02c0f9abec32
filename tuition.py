# tuition.py (tuition policy: fee lookup, total, saving the result)
import logging
from dataclasses import dataclass
from decimal import Decimal

from db import DatabaseError, TuitionRates
from forms import TuitionRequest

logger = logging.getLogger(__name__)

NO_ORIENTATION_FEE = Decimal("0.00")


class SaveError(DatabaseError):
    """The total was computed but the user record could not be written."""


@dataclass(frozen=True)
class TuitionQuote:
    request: TuitionRequest
    rates: TuitionRates
    orientation_fee: Decimal
    total: Decimal
    created: bool


def compute_total(rates: TuitionRates, num_credits: int, orientation_fee: Decimal) -> Decimal:
    return rates.credits_cost * num_credits + rates.nonresidency_fee + orientation_fee


def calculate_tuition(req: TuitionRequest, db) -> TuitionQuote:
    """
    Price a validated request and store the result for the student.

    Reads the rate row for (studies, residency) and, if requested, the
    orientation fee; the write happens last so a failed read leaves the
    stored record untouched.

    Raises DatabaseError (or SaveError for the final write).
    """
    try:
        rates = db.fetch_tuition_rates(req.studies, req.residency)
        fee = db.fetch_orientation_fee() if req.orientation else NO_ORIENTATION_FEE
    except DatabaseError as e:
        raise DatabaseError(f"Error while accessing database: {e}") from e

    total = compute_total(rates, req.num_credits, fee)
    logger.info("The total tuition cost is $%s", total)

    try:
        created = db.save_user_tuition(req.first_name, req.last_name, total)
    except DatabaseError as e:
        raise SaveError(f"Error while saving to the database: {e}") from e

    return TuitionQuote(request=req, rates=rates, orientation_fee=fee, total=total, created=created)
