# db.py (MySQL gateway for tuition rates and user records)
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal

import mysql.connector
from mysql.connector import pooling

logger = logging.getLogger(__name__)

NO_ROWS = "no rows returned by a query that expected to return at least one row"


class DatabaseError(Exception):
    """Any failure talking to the database, including missing/ambiguous rows."""


@dataclass(frozen=True)
class TuitionRates:
    credits_cost: Decimal
    nonresidency_fee: Decimal


@dataclass(frozen=True)
class UserTuitionRecord:
    first_name: str
    last_name: str
    tuition_cost: Decimal


# ---------------------------------------------------
# Entities (match DDL.sql shape)
#   CreditCosts(Studies, Residency, CreditsCost, NonresidencyFee)
#   orientation_fee(Fee)
#   UserTuition(FirstName, LastName, TuitionCost)
# ---------------------------------------------------
class TuitionDatabase:
    """
    Shared handle over a MySQL connection pool.

    One instance is built at startup and used by every request; each call
    borrows a pooled connection and hands it back before returning. The
    driver's pool fails at once when it is empty, so borrowers queue on a
    semaphore sized to the pool instead.
    """

    def __init__(self, pool, pool_size):
        self._pool = pool
        self._slots = threading.BoundedSemaphore(pool_size)

    @classmethod
    def from_settings(cls, settings):
        try:
            pool = pooling.MySQLConnectionPool(
                pool_name="tuition",
                pool_size=settings.pool_size,
                host=settings.db_host,
                port=settings.db_port,
                user=settings.db_user,
                password=settings.db_pass,
                database=settings.db_name,
            )
        except mysql.connector.Error as e:
            raise DatabaseError(str(e)) from e
        logger.info("Connected to the database %s at %s:%s.", settings.db_name, settings.db_host, settings.db_port)
        return cls(pool, settings.pool_size)

    @contextmanager
    def _connection(self):
        with self._slots:
            try:
                conn = self._pool.get_connection()
            except mysql.connector.Error as e:
                raise DatabaseError(str(e)) from e
            try:
                yield conn
            finally:
                # close() hands a pooled connection back to the pool
                conn.close()

    def _fetch_exactly_one(self, sql, params=()):
        with self._connection() as conn:
            cur = conn.cursor(dictionary=True)
            try:
                cur.execute(sql, params)
                rows = cur.fetchall()
            except mysql.connector.Error as e:
                raise DatabaseError(str(e)) from e
            finally:
                cur.close()
        if not rows:
            raise DatabaseError(NO_ROWS)
        if len(rows) > 1:
            raise DatabaseError(f"expected one row, query returned {len(rows)}")
        return rows[0]

    # ---- REFERENCE DATA ----
    def fetch_tuition_rates(self, studies, residency) -> TuitionRates:
        row = self._fetch_exactly_one(
            "SELECT CreditsCost, NonresidencyFee FROM CreditCosts WHERE Studies=%s AND Residency=%s",
            (studies.value, residency.value),
        )
        return TuitionRates(credits_cost=row["CreditsCost"], nonresidency_fee=row["NonresidencyFee"])

    def fetch_orientation_fee(self) -> Decimal:
        row = self._fetch_exactly_one("SELECT Fee FROM orientation_fee")
        return row["Fee"]

    # ---- USER TUITION ----
    def fetch_user_tuition(self, first_name, last_name) -> UserTuitionRecord:
        row = self._fetch_exactly_one(
            "SELECT FirstName, LastName, TuitionCost FROM UserTuition WHERE FirstName=%s AND LastName=%s",
            (first_name, last_name),
        )
        return UserTuitionRecord(
            first_name=row["FirstName"],
            last_name=row["LastName"],
            tuition_cost=row["TuitionCost"],
        )

    def save_user_tuition(self, first_name, last_name, tuition_cost) -> bool:
        """Insert or overwrite the record for a name pair. Returns True when a row was created."""
        with self._connection() as conn:
            cur = conn.cursor()
            try:
                cur.execute(
                    "INSERT INTO UserTuition (FirstName, LastName, TuitionCost) VALUES (%s, %s, %s) "
                    "ON DUPLICATE KEY UPDATE TuitionCost=VALUES(TuitionCost)",
                    (first_name, last_name, tuition_cost),
                )
                conn.commit()
                # MySQL reports 1 for a fresh insert, 2 for an update, 0 if unchanged.
                return cur.rowcount == 1
            except mysql.connector.Error as e:
                raise DatabaseError(str(e)) from e
            finally:
                cur.close()
