"""
Database module for Malta Auctions.

SQLite storage for seized assets and their currency serial numbers.
"""

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config
from .models import AssetType, AuctionAsset

_local = threading.local()

_ASSET_COLUMNS = (
    "id, type, seizure_reason, un_sanctions_compliance, local_court_order, "
    "contraband_type, imo_number, arrest_warrant_id, description, "
    "debt_amount, value, origin, source, date_added"
)


def _get_connection() -> sqlite3.Connection:
    """
    Get a thread-local database connection.
    Connections are reused within the same thread.
    """
    if not hasattr(_local, 'conn') or _local.conn is None:
        db_path = Path(config.DB_PATH)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(db_path), check_same_thread=False)
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        conn.execute("PRAGMA foreign_keys=ON;")
        conn.row_factory = sqlite3.Row
        _local.conn = conn
    return _local.conn


@contextmanager
def _transaction():
    """Commit on success, roll back on failure."""
    conn = _get_connection()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def init_db() -> None:
    """
    Initialize database schema with indexes.
    Safe to call multiple times.
    """
    with _transaction() as conn:
        conn.execute("""
        CREATE TABLE IF NOT EXISTS auction_assets (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            type TEXT NOT NULL CHECK (type IN ('real_estate', 'vessel', 'currency', 'vehicle')),
            seizure_reason TEXT NOT NULL CHECK (seizure_reason IN ('sanctions', 'debt', 'contraband')),
            un_sanctions_compliance INTEGER NOT NULL DEFAULT 0,
            local_court_order TEXT,
            contraband_type TEXT,
            imo_number TEXT,
            arrest_warrant_id TEXT,
            description TEXT NOT NULL,
            debt_amount TEXT,
            value TEXT,
            origin TEXT,
            source TEXT NOT NULL,
            date_added TEXT NOT NULL
        );""")
        conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_auction_assets_type
        ON auction_assets(type);""")
        conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_auction_assets_compliance
        ON auction_assets(un_sanctions_compliance);""")
        conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_auction_assets_date
        ON auction_assets(date_added);""")

        conn.execute("""
        CREATE TABLE IF NOT EXISTS asset_serials (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            asset_id INTEGER NOT NULL REFERENCES auction_assets(id) ON DELETE CASCADE,
            serial_number TEXT NOT NULL
        );""")
        conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_asset_serials_asset
        ON asset_serials(asset_id);""")


def insert_asset(asset: AuctionAsset) -> int:
    """Store an asset and its serial numbers. Returns the generated id."""
    with _transaction() as conn:
        cur = conn.execute(
            "INSERT INTO auction_assets(type, seizure_reason, un_sanctions_compliance, "
            "local_court_order, contraband_type, imo_number, arrest_warrant_id, description, "
            "debt_amount, value, origin, source, date_added) VALUES(?,?,?,?,?,?,?,?,?,?,?,?,?)",
            (
                asset.type.value,
                asset.seizure_reason.value,
                1 if asset.legal_status.un_sanctions_compliance else 0,
                asset.legal_status.local_court_order,
                asset.contraband_type.value if asset.contraband_type else None,
                asset.imo_number,
                asset.arrest_warrant_id,
                asset.description,
                asset.debt_amount,
                asset.value,
                asset.origin,
                asset.source,
                asset.date_added,
            )
        )
        asset_id = cur.lastrowid
        if asset.serial_numbers:
            conn.executemany(
                "INSERT INTO asset_serials(asset_id, serial_number) VALUES(?,?)",
                [(asset_id, serial) for serial in asset.serial_numbers]
            )
    return asset_id


def _serials_for(conn: sqlite3.Connection, asset_id: int) -> List[str]:
    cur = conn.execute(
        "SELECT serial_number FROM asset_serials WHERE asset_id=? ORDER BY id ASC",
        (asset_id,)
    )
    return [row['serial_number'] for row in cur.fetchall()]


def _row_to_asset(conn: sqlite3.Connection, row: sqlite3.Row) -> AuctionAsset:
    serials: List[str] = []
    if row['type'] == AssetType.CURRENCY.value:
        serials = _serials_for(conn, row['id'])

    return AuctionAsset(
        id=row['id'],
        type=row['type'],
        seizure_reason=row['seizure_reason'],
        legal_status={
            "un_sanctions_compliance": row['un_sanctions_compliance'] == 1,
            "local_court_order": row['local_court_order'],
        },
        contraband_type=row['contraband_type'],
        imo_number=row['imo_number'],
        arrest_warrant_id=row['arrest_warrant_id'],
        description=row['description'],
        debt_amount=row['debt_amount'],
        value=row['value'],
        origin=row['origin'],
        source=row['source'],
        date_added=row['date_added'],
        serial_numbers=serials or None,
    )


def _query_assets(where: str = "", params: tuple = ()) -> List[AuctionAsset]:
    conn = _get_connection()
    cur = conn.execute(
        f"SELECT {_ASSET_COLUMNS} FROM auction_assets {where} ORDER BY date_added DESC, id DESC",
        params
    )
    return [_row_to_asset(conn, row) for row in cur.fetchall()]


def get_all_assets() -> List[AuctionAsset]:
    return _query_assets()


def get_assets_by_type(asset_type: AssetType) -> List[AuctionAsset]:
    return _query_assets("WHERE type=?", (AssetType(asset_type).value,))


def get_assets_by_sanctions_status(compliant: bool) -> List[AuctionAsset]:
    return _query_assets("WHERE un_sanctions_compliance=?", (1 if compliant else 0,))


def get_asset(asset_id: int) -> Optional[AuctionAsset]:
    """Retrieve a single asset by id."""
    conn = _get_connection()
    cur = conn.execute(f"SELECT {_ASSET_COLUMNS} FROM auction_assets WHERE id=?", (asset_id,))
    row = cur.fetchone()
    return _row_to_asset(conn, row) if row else None


# ============================================================
# Metrics and Health
# ============================================================

def get_db_stats() -> Dict[str, Any]:
    """Get database statistics for monitoring."""
    conn = _get_connection()
    stats: Dict[str, Any] = {}
    for table in ['auction_assets', 'asset_serials']:
        cur = conn.execute(f"SELECT COUNT(*) as cnt FROM {table}")
        stats[f"{table}_count"] = cur.fetchone()['cnt']
    cur = conn.execute("SELECT type, COUNT(*) as cnt FROM auction_assets GROUP BY type")
    stats["assets_by_type"] = {row['type']: row['cnt'] for row in cur.fetchall()}
    return stats


# ============================================================
# Test Support
# ============================================================

def reset_db() -> None:
    """
    Reset the database for test isolation.
    Clears all tables but preserves schema.
    """
    with _transaction() as conn:
        conn.execute("DELETE FROM asset_serials")
        conn.execute("DELETE FROM auction_assets")


def close_connection() -> None:
    """Close the thread-local connection."""
    if hasattr(_local, 'conn') and _local.conn is not None:
        _local.conn.close()
        _local.conn = None
