"""Run the payroll batch from the shell.

Without arguments this is the periodic run (previous calendar month).
With --month/--year it is a manual run for that past month.
"""

from __future__ import annotations

import argparse
import json

from langsapost.container import build_container
from langsapost.logging_config import configure_logging
from langsapost.main import load_settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate monthly author payrolls")
    parser.add_argument("--month", type=int)
    parser.add_argument("--year", type=int)
    args = parser.parse_args()
    if (args.month is None) != (args.year is None):
        parser.error("--month and --year must be given together")

    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(db_config=dict(settings.DB_CONFIG), settings=settings)
    try:
        scheduler = container.payroll_scheduler
        if args.month is None:
            result = scheduler.run_periodic()
        else:
            result = scheduler.run_manual(args.month, args.year)
    finally:
        container.close()

    print(json.dumps(result.to_dict()["summary"]))
    if result.failed:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
