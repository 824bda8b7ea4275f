from __future__ import annotations

from langsapost.database.bootstrap import apply_seed_sql, ensure_admin_user
from langsapost.main import load_settings


def main() -> None:
    settings = load_settings()
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config)
    ensure_admin_user(db_config, email=settings.ADMIN_EMAIL, password=settings.ADMIN_PASSWORD)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
