"""Load a seed file and bulk-compute timesheets without starting the API.

Usage: python scripts/bulk_compute.py [seed.json] [rule_set_id]
"""

from __future__ import annotations

import importlib
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.timesheet_engine.timesheet_engine.container import build_container
from src.timesheet_engine.timesheet_engine.core.constants import DEFAULT_RULE_SET_ID
from src.timesheet_engine.timesheet_engine.seed import load_seed


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    seed_path = Path(sys.argv[1]) if len(sys.argv) > 1 else REPO_ROOT / "examples" / "seed.example.json"
    rule_set_id = sys.argv[2] if len(sys.argv) > 2 else DEFAULT_RULE_SET_ID

    container = build_container(default_rule_set=settings.DEFAULT_RULE_SET, fallback_shift=settings.DEFAULT_SHIFT)
    load_seed(container, seed_path)
    result = container.timesheet_service.bulk_compute_timesheets(rule_set_id)

    print(json.dumps(result.to_dict(), indent=2))
    for ts in container.timesheets_repo.list_all():
        print(
            f"{ts.employee_id} {ts.work_date.isoformat()} "
            f"total={ts.total_hours:.2f}h ot={ts.overtime_hours:.2f}h night={ts.night_diff_hours:.2f}h"
        )


if __name__ == "__main__":
    main()
