"""Example: drive the service layer directly (no Flask).

Controllers are thin; the computation and approval rules live in the services.
"""

import importlib
from pathlib import Path

from config import get_settings_module

from src.timesheet_engine.timesheet_engine.container import build_container
from src.timesheet_engine.timesheet_engine.seed import load_seed


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(default_rule_set=settings.DEFAULT_RULE_SET, fallback_shift=settings.DEFAULT_SHIFT)
    load_seed(container, Path(__file__).resolve().parent / "seed.example.json")

    service = container.timesheet_service
    print(service.bulk_compute_timesheets("RS-DEFAULT").to_dict())

    ts = service.get_by_employee("EMP-001")[0]
    service.submit_timesheet(ts.timesheet_id)
    service.approve_timesheet(ts.timesheet_id, "MGR-001")
    print(service.get_timesheet(ts.timesheet_id).to_dict())


if __name__ == "__main__":
    main()
