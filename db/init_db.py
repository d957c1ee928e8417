"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db

Every table carries the owning account in ``user_id`` (the Telegram user
id); repositories always filter on it.
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Income / expense ledger
CREATE TABLE IF NOT EXISTS transactions (
    id              UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id         BIGINT NOT NULL,
    type            VARCHAR(10) NOT NULL CHECK (type IN ('income', 'expense')),
    category        VARCHAR(20) NOT NULL CHECK (category IN (
                        'rent', 'salary', 'marketing', 'general', 'stock', '3d-printing',
                        'courses', 'school', 'projects', 'utilities', 'transfer', 'other')),
    amount          NUMERIC(14,2) NOT NULL,
    description     TEXT NOT NULL DEFAULT '',
    date            DATE NOT NULL DEFAULT CURRENT_DATE,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS employees (
    id              UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id         BIGINT NOT NULL,
    name            VARCHAR(100) NOT NULL,
    position        VARCHAR(100) NOT NULL,
    salary          NUMERIC(14,2) NOT NULL DEFAULT 0,
    start_date      DATE NOT NULL DEFAULT CURRENT_DATE,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Inventory components
CREATE TABLE IF NOT EXISTS components (
    id              UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id         BIGINT NOT NULL,
    name            VARCHAR(100) NOT NULL,
    quantity        INT NOT NULL DEFAULT 0,
    unit_price      NUMERIC(14,2) NOT NULL DEFAULT 0,
    min_stock       INT NOT NULL DEFAULT 5,
    category        VARCHAR(100) NOT NULL DEFAULT 'General',
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS students (
    id              UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id         BIGINT NOT NULL,
    name            VARCHAR(100) NOT NULL,
    email           VARCHAR(200) NOT NULL DEFAULT '',
    course          VARCHAR(100) NOT NULL,
    batch_id        VARCHAR(50) NOT NULL DEFAULT '',
    enrollment_date DATE NOT NULL DEFAULT CURRENT_DATE,
    payment_status  VARCHAR(10) NOT NULL DEFAULT 'pending'
                        CHECK (payment_status IN ('paid', 'pending', 'overdue')),
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS print_jobs (
    id                UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id           BIGINT NOT NULL,
    name              VARCHAR(100) NOT NULL,
    filament_used     NUMERIC(10,2) NOT NULL,
    filament_cost     NUMERIC(14,2) NOT NULL,
    labor_hours       NUMERIC(8,2) NOT NULL,
    hourly_rate       NUMERIC(14,2) NOT NULL,
    electricity_cost  NUMERIC(14,2) NOT NULL DEFAULT 0,
    total_cost        NUMERIC(14,2) NOT NULL,
    date              DATE NOT NULL DEFAULT CURRENT_DATE,
    created_at        TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS projects (
    id              UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id         BIGINT NOT NULL,
    name            VARCHAR(100) NOT NULL,
    description     TEXT NOT NULL DEFAULT '',
    total_cost      NUMERIC(14,2) NOT NULL DEFAULT 0,
    total_income    NUMERIC(14,2) NOT NULL DEFAULT 0,
    hours_spent     NUMERIC(8,2) NOT NULL DEFAULT 0,
    status          VARCHAR(10) NOT NULL DEFAULT 'active'
                        CHECK (status IN ('active', 'completed', 'paused')),
    start_date      DATE NOT NULL DEFAULT CURRENT_DATE,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS loans (
    id                UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id           BIGINT NOT NULL,
    name              VARCHAR(100) NOT NULL,
    principal_amount  NUMERIC(14,2) NOT NULL,
    interest_rate     NUMERIC(6,3) NOT NULL DEFAULT 0,
    total_emi_count   INT NOT NULL CHECK (total_emi_count >= 1),
    paid_emi_count    INT NOT NULL DEFAULT 0,
    emi_amount        NUMERIC(14,2) NOT NULL,
    start_date        DATE NOT NULL DEFAULT CURRENT_DATE,
    lender            VARCHAR(100) NOT NULL DEFAULT '',
    notes             TEXT NOT NULL DEFAULT '',
    status            VARCHAR(10) NOT NULL DEFAULT 'active'
                          CHECK (status IN ('active', 'completed')),
    created_at        TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS shareholders (
    id                    UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id               BIGINT NOT NULL,
    name                  VARCHAR(100) NOT NULL,
    designation           VARCHAR(100) NOT NULL DEFAULT '',
    ownership_percentage  NUMERIC(5,2) NOT NULL DEFAULT 0,
    total_invested        NUMERIC(14,2) NOT NULL DEFAULT 0,
    email                 VARCHAR(200) NOT NULL DEFAULT '',
    phone                 VARCHAR(50) NOT NULL DEFAULT '',
    created_at            TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS shareholder_investments (
    id              UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id         BIGINT NOT NULL,
    shareholder_id  UUID NOT NULL REFERENCES shareholders(id) ON DELETE CASCADE,
    amount          NUMERIC(14,2) NOT NULL,
    investment_date DATE NOT NULL DEFAULT CURRENT_DATE,
    description     TEXT NOT NULL DEFAULT '',
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Indexes for the per-account list queries
CREATE INDEX IF NOT EXISTS idx_transactions_user_date ON transactions(user_id, date DESC);
CREATE INDEX IF NOT EXISTS idx_transactions_user_category ON transactions(user_id, category);
CREATE INDEX IF NOT EXISTS idx_print_jobs_user_date ON print_jobs(user_id, date DESC);
CREATE INDEX IF NOT EXISTS idx_investments_shareholder ON shareholder_investments(shareholder_id);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
