import json
import logging
import sqlite3
from datetime import datetime
from typing import Final, List, Optional, Union
from uuid import UUID

from expense.models.period import Interval
from expense.models.transaction import Transaction
from expense.models.user_settings import UserSettings
from expense.settings import DB_PATH, DB_SCHEMA_VERSION, ensure_data_dir

logger: Final = logging.getLogger(__name__)

_COLUMNS: Final = "id, title, amount_cents, category, payment_method, date, location, address, created_at"


class Database:
    """本地记录存储（交易以 UUID 为主键），支持上下文管理器使用方式"""

    def __init__(self, db_path: Optional[str] = None):
        if db_path is None:
            ensure_data_dir()
        self._db_path = str(db_path or DB_PATH)
        self.conn: Optional[sqlite3.Connection] = None
        self._connect()
        self._init_db()

    def _connect(self) -> None:
        """建立数据库连接"""
        self.conn = sqlite3.connect(self._db_path)

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _init_db(self) -> None:
        """初始化数据库schema，支持迁移"""
        cursor = self.conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY
            )
        """)
        cursor.execute("SELECT version FROM schema_version")
        row = cursor.fetchone()
        current_version = row[0] if row else 0

        if current_version < 1:
            self._migrate_v1(cursor)
        if current_version < 2:
            self._migrate_v2(cursor)

        if current_version < DB_SCHEMA_VERSION:
            cursor.execute("DELETE FROM schema_version")
            cursor.execute("INSERT INTO schema_version (version) VALUES (?)", (DB_SCHEMA_VERSION,))
            logger.info("数据库已迁移: v%d -> v%d (%s)", current_version, DB_SCHEMA_VERSION, self._db_path)

        self.conn.commit()

    def _migrate_v1(self, cursor: sqlite3.Cursor) -> None:
        """V1: transactions表"""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS transactions (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL DEFAULT '',
                amount_cents INTEGER NOT NULL,
                category TEXT NOT NULL,
                payment_method TEXT NOT NULL,
                date TEXT NOT NULL,
                location TEXT,
                address TEXT,
                created_at TEXT NOT NULL
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_transactions_date
            ON transactions(date DESC, created_at DESC)
        """)

    def _migrate_v2(self, cursor: sqlite3.Cursor) -> None:
        """V2: 用户设置表（单行JSON）"""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS user_settings (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                data TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

    # ==================== Transaction CRUD ====================

    def add_transaction(self, transaction: Transaction) -> UUID:
        """新增交易"""
        created_at = datetime.now().isoformat()
        cursor = self.conn.cursor()
        cursor.execute(f"""
            INSERT INTO transactions ({_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, transaction.to_row() + (created_at,))
        self.conn.commit()
        transaction.created_at = created_at
        return transaction.id

    def update_transaction(self, transaction: Transaction) -> None:
        """更新交易（保持id和created_at不变）"""
        row = transaction.to_row()
        cursor = self.conn.cursor()
        cursor.execute("""
            UPDATE transactions SET
                title = ?,
                amount_cents = ?,
                category = ?,
                payment_method = ?,
                date = ?,
                location = ?,
                address = ?
            WHERE id = ?
        """, row[1:] + (row[0],))
        self.conn.commit()

    def delete_transaction(self, transaction_id: Union[UUID, str]) -> None:
        """删除交易"""
        cursor = self.conn.cursor()
        cursor.execute("DELETE FROM transactions WHERE id = ?", (str(transaction_id),))
        self.conn.commit()

    def get_transaction_by_id(self, transaction_id: Union[UUID, str]) -> Optional[Transaction]:
        """根据ID获取交易"""
        cursor = self.conn.cursor()
        cursor.execute(f"SELECT {_COLUMNS} FROM transactions WHERE id = ?", (str(transaction_id),))
        row = cursor.fetchone()
        return Transaction.from_row(row) if row else None

    def get_all_transactions(self) -> List[Transaction]:
        """获取所有交易，按日期倒序"""
        cursor = self.conn.cursor()
        cursor.execute(f"SELECT {_COLUMNS} FROM transactions ORDER BY date DESC, created_at DESC")
        return [Transaction.from_row(row) for row in cursor.fetchall()]

    def get_transactions_in_interval(self, interval: Interval) -> List[Transaction]:
        """获取半开区间 [start, end) 内的交易，按日期倒序"""
        cursor = self.conn.cursor()
        cursor.execute(f"""
            SELECT {_COLUMNS} FROM transactions
            WHERE date >= ? AND date < ?
            ORDER BY date DESC, created_at DESC
        """, (interval.start.isoformat(), interval.end.isoformat()))
        return [Transaction.from_row(row) for row in cursor.fetchall()]

    def count_transactions(self) -> int:
        cursor = self.conn.cursor()
        cursor.execute("SELECT COUNT(*) FROM transactions")
        return cursor.fetchone()[0]

    # ==================== User Settings ====================

    def load_settings(self) -> UserSettings:
        """读取用户设置，未保存过时返回默认设置"""
        cursor = self.conn.cursor()
        cursor.execute("SELECT data FROM user_settings WHERE id = 1")
        row = cursor.fetchone()
        return UserSettings.from_dict(json.loads(row[0]) if row else None)

    def save_settings(self, settings: UserSettings) -> None:
        """保存用户设置"""
        cursor = self.conn.cursor()
        cursor.execute("""
            INSERT INTO user_settings (id, data, updated_at) VALUES (1, ?, ?)
            ON CONFLICT(id) DO UPDATE SET data = excluded.data, updated_at = excluded.updated_at
        """, (json.dumps(settings.to_dict()), datetime.now().isoformat()))
        self.conn.commit()

    def close(self) -> None:
        """关闭数据库连接"""
        if self.conn is not None:
            self.conn.close()
            self.conn = None
