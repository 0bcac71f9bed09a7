from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

SQL_DIR = Path(__file__).resolve().parent / "sql"
SCHEMA_PATH = SQL_DIR / "schema.sql"
SEED_PATH = SQL_DIR / "seed.sql"

# (email, password, role, dni, first_name, last_name, unit_id, station_id)
DEMO_USERS = (
    ("admin@brigadas.local", "admin123", "admin", None, "Admin", "Demo", None, None),
    ("jr.oriente@brigadas.local", "jefe1234", "jr", "11111111H", "Marta", "Suárez", 1, None),
    ("bf.oriente@brigadas.local", "bombero1", "bf", "22222222J", "Pablo", "Menéndez", 1, None),
    ("bf.llanes@brigadas.local", "bombero2", "bf", "33333333P", "Lucía", "Fernández", None, 1),
)


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from settings, not from the SQL file.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted strings."""
    buf: list[str] = []
    quote: Optional[str] = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _run_script(db_config: dict, path: Path) -> None:
    target = DBConfig.from_mapping(db_config)
    sql = _strip_comments(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8")))
    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, Path(schema_path))
    logger.info("Schema applied from %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path = SEED_PATH) -> None:
    _run_script(db_config, Path(seed_path))
    logger.info("Seed applied from %s", seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Upsert one account per role so a fresh database can be used right away."""
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor(dictionary=True)
        for email, password, role, dni, first_name, last_name, unit_id, station_id in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET password_hash=%s, role=%s, dni=%s, first_name=%s, last_name=%s,
                        unit_id=%s, station_id=%s, is_active=1
                    WHERE email=%s
                    """,
                    (password_hash, role, dni, first_name, last_name, unit_id, station_id, email),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (email, password_hash, role, dni, first_name, last_name, unit_id, station_id)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    (email, password_hash, role, dni, first_name, last_name, unit_id, station_id),
                )
        conn.commit()
    finally:
        conn.close()
    logger.info("Demo users ready (%d accounts)", len(DEMO_USERS))


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
