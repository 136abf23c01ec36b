"""Relational schema of the ledger store.

Tables are declared with SQLAlchemy Core so identity columns stay portable
across SQLite and PostgreSQL. The two projections the engine reads
(``account_total`` and ``cumulative_amount``) are plain views over the
tables: they are recomputed by the database on every read and therefore
always reflect the current entry state.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.engine import Engine

from ledger.infrastructure.logging.logger import get_app_logger


metadata = MetaData()

account_table = Table(
    "account",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(80), nullable=False),
    Column("initial_amount", Numeric(15, 3), nullable=False, default=0),
)

category_table = Table(
    "category",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("account_id", Integer, nullable=False),
    Column("name", String(80), nullable=False),
    Column("type", Integer, nullable=False),
    UniqueConstraint("account_id", "name", "type", name="uq_category_account_name_type"),
    CheckConstraint("type IN (1, 2)", name="ck_category_type"),
)

entry_table = Table(
    "entry",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("account_id", Integer, ForeignKey("account.id"), nullable=False),
    Column(
        "affected_account_id",
        Integer,
        ForeignKey("account.id"),
        nullable=True,
    ),
    Column("type", Integer, nullable=False),
    Column("description", String(255), nullable=True),
    Column("category", Integer, ForeignKey("category.id"), nullable=True),
    Column("amount", Numeric(15, 3), nullable=False),
    Column("date", String(10), nullable=False, index=True),
    CheckConstraint("type IN (1, 2, 3)", name="ck_entry_type"),
    CheckConstraint("amount >= 0", name="ck_entry_amount_magnitude"),
)


# Signed movement of every entry, once per account it touches.
ENTRY_MOVEMENT_VIEW_SQL = """
CREATE VIEW entry_movement AS
SELECT e.account_id AS account_id,
       e.date AS date,
       CASE WHEN e.type = 1 THEN e.amount ELSE -e.amount END AS delta
FROM entry e
UNION ALL
SELECT e.affected_account_id AS account_id,
       e.date AS date,
       e.amount AS delta
FROM entry e
WHERE e.type = 3 AND e.affected_account_id IS NOT NULL
"""

ACCOUNT_TOTAL_VIEW_SQL = """
CREATE VIEW account_total AS
SELECT a.id AS id,
       a.name AS name,
       a.initial_amount AS initial_amount,
       a.initial_amount + COALESCE(
           (SELECT SUM(m.delta) FROM entry_movement m WHERE m.account_id = a.id),
           0
       ) AS total
FROM account a
"""

CUMULATIVE_AMOUNT_VIEW_SQL = """
CREATE VIEW cumulative_amount AS
SELECT months.account_id AS account_id,
       months.month AS month,
       a.initial_amount + COALESCE(
           (
               SELECT SUM(m.delta)
               FROM entry_movement m
               WHERE m.account_id = months.account_id
                 AND m.date < months.month || '-01'
           ),
           0
       ) AS amount
FROM (
    SELECT DISTINCT account_id, SUBSTR(date, 1, 7) AS month
    FROM entry_movement
) months
JOIN account a ON a.id = months.account_id
"""

VIEW_DEFINITIONS = (
    ("entry_movement", ENTRY_MOVEMENT_VIEW_SQL),
    ("account_total", ACCOUNT_TOTAL_VIEW_SQL),
    ("cumulative_amount", CUMULATIVE_AMOUNT_VIEW_SQL),
)


def create_schema(engine: Engine, logger=None) -> None:
    """Create tables and (re)create projection views.

    Args:
        engine: Engine connected to the ledger database.
        logger: Optional logger compatible with logging.Logger-like API.
    """
    resolved_logger = logger or get_app_logger()
    metadata.create_all(engine)
    with engine.begin() as conn:
        for name, _ in reversed(VIEW_DEFINITIONS):
            conn.exec_driver_sql(f"DROP VIEW IF EXISTS {name}")
        for _, create_sql in VIEW_DEFINITIONS:
            conn.exec_driver_sql(create_sql)
    resolved_logger.info(
        f"Ledger schema ready: tables={sorted(metadata.tables)}, "
        f"views={[name for name, _ in VIEW_DEFINITIONS]}"
    )


__all__ = [
    "metadata",
    "account_table",
    "category_table",
    "entry_table",
    "VIEW_DEFINITIONS",
    "create_schema",
]
