import sqlite3
from pathlib import Path
from typing import Optional, Dict, Any, List, TYPE_CHECKING

from vibefid_server import config
from vibefid_logs.loggers import server_logger

if TYPE_CHECKING:
    from ..card_utils.card import FidCard

DB_PATH = Path(config.DB_PATH)

CARD_COLUMNS = (
    "fid", "address", "username", "display_name", "bio", "neynar_score",
    "power_badge", "rarity", "foil", "wear", "power", "suit", "rank",
    "image_url", "card_image_url",
)


def get_db_connection():
    conn = sqlite3.connect(DB_PATH, timeout=10)
    conn.row_factory = sqlite3.Row  # Allows accessing columns by name
    return conn


def init_db():
    """Create the card registry and rate-limit tables if they are missing."""
    if not DB_PATH.parent.exists():
        DB_PATH.parent.mkdir(parents=True)

    server_logger.info("db_init", path=str(DB_PATH.resolve()))

    conn = get_db_connection()
    cursor = conn.cursor()

    # One card per FID; traits are whatever was computed at mint time.
    cursor.execute("""
    CREATE TABLE IF NOT EXISTS FarcasterCards (
        fid INTEGER PRIMARY KEY,
        address TEXT,
        username TEXT NOT NULL,
        display_name TEXT NOT NULL,
        bio TEXT,
        neynar_score REAL DEFAULT 0,
        power_badge BOOLEAN DEFAULT 0,
        rarity TEXT NOT NULL,
        foil TEXT NOT NULL,
        wear TEXT NOT NULL,
        power INTEGER NOT NULL,
        suit TEXT NOT NULL,
        rank TEXT NOT NULL,
        image_url TEXT,
        card_image_url TEXT,
        minted_at TEXT DEFAULT CURRENT_TIMESTAMP
    );
    """)

    # Shared TTL store for rate limiting. Rows past expires_at_ms are dead.
    cursor.execute("""
    CREATE TABLE IF NOT EXISTS RateLimits (
        key TEXT PRIMARY KEY,
        last_hit_ms INTEGER NOT NULL,
        expires_at_ms INTEGER NOT NULL
    );
    """)
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_ratelimits_expiry ON RateLimits (expires_at_ms)"
    )

    conn.commit()
    conn.close()


def get_card_by_fid(fid: int) -> Optional[Dict[str, Any]]:
    conn = get_db_connection()
    cursor = conn.cursor()
    cursor.execute("SELECT * FROM FarcasterCards WHERE fid = ?", (fid,))
    row = cursor.fetchone()
    conn.close()
    if row:
        return dict(row)
    return None


def create_card_entry(card: "FidCard") -> bool:
    """Insert a minted card. Returns False if the FID is already minted."""
    data = card.to_dict()
    values = tuple(data[col] for col in CARD_COLUMNS)
    placeholders = ", ".join("?" for _ in CARD_COLUMNS)

    conn = get_db_connection()
    cursor = conn.cursor()
    try:
        cursor.execute(
            f"INSERT INTO FarcasterCards ({', '.join(CARD_COLUMNS)}) VALUES ({placeholders})",
            values,
        )
        conn.commit()
        return True
    except sqlite3.IntegrityError as e:
        server_logger.warning("db_card_insert_conflict", fid=card.fid, error=str(e))
        return False
    finally:
        conn.close()


def list_cards(limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
    """Most recently minted cards first."""
    conn = get_db_connection()
    cursor = conn.cursor()
    cursor.execute("""
        SELECT * FROM FarcasterCards
        ORDER BY minted_at DESC, fid DESC
        LIMIT ? OFFSET ?
    """, (limit, offset))
    rows = cursor.fetchall()
    conn.close()
    return [dict(row) for row in rows]


def count_cards() -> int:
    conn = get_db_connection()
    cursor = conn.cursor()
    cursor.execute("SELECT COUNT(*) as count FROM FarcasterCards")
    count = cursor.fetchone()["count"]
    conn.close()
    return count


def hit_rate_limit(key: str, window_ms: int, now_ms: int) -> int:
    """
    Check-and-set a rate-limit key in one transaction.

    Returns 0 and records the hit when the key is free, otherwise the number
    of milliseconds left in the current window (nothing is written).
    """
    conn = get_db_connection()
    conn.isolation_level = None  # manual transaction control
    cursor = conn.cursor()
    try:
        cursor.execute("BEGIN IMMEDIATE")
        cursor.execute("DELETE FROM RateLimits WHERE expires_at_ms <= ?", (now_ms,))
        cursor.execute("SELECT last_hit_ms FROM RateLimits WHERE key = ?", (key,))
        row = cursor.fetchone()

        if row and now_ms - row["last_hit_ms"] < window_ms:
            cursor.execute("COMMIT")
            return window_ms - (now_ms - row["last_hit_ms"])

        cursor.execute("""
            INSERT INTO RateLimits (key, last_hit_ms, expires_at_ms)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                last_hit_ms = excluded.last_hit_ms,
                expires_at_ms = excluded.expires_at_ms
        """, (key, now_ms, now_ms + window_ms))
        cursor.execute("COMMIT")
        return 0
    except sqlite3.Error:
        if conn.in_transaction:
            cursor.execute("ROLLBACK")
        raise
    finally:
        conn.close()


def clear_rate_limits(prefix: str = "") -> int:
    conn = get_db_connection()
    cursor = conn.cursor()
    cursor.execute("DELETE FROM RateLimits WHERE key LIKE ?", (prefix + "%",))
    deleted = cursor.rowcount
    conn.commit()
    conn.close()
    return deleted
