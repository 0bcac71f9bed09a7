from __future__ import annotations

import importlib

from dotenv import load_dotenv

from brigade_attendance.config import get_settings_module
from brigade_attendance.database.bootstrap import DEMO_USERS, apply_seed_sql, ensure_demo_users


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config)
    ensure_demo_users(db_config)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"({len(DEMO_USERS)} demo accounts)"
    )


if __name__ == "__main__":
    main()
