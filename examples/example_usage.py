"""Example: drive the service layer directly (no Flask).

Imports a small matrix sheet, then prints the month's weighted statistics.
"""

import importlib

from config import get_settings_module

from src.choir_attendance.choir_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    result = container.importer.import_matrix(
        [
            ["이름", "파트", "2026-02-07", "2026-02-08"],
            ["최민준", "Tenor", "O", "L"],
        ]
    )
    print(result.message, result.errors)

    report = container.reports.monthly(2026, 2)
    for row in report.statistics.groups:
        print(f"{row.group:<12} {row.attended:>3}/{row.expected:<3} {row.rate}%")
    print(f"{'TOTAL':<12} {report.statistics.overall.rate}%")


if __name__ == "__main__":
    main()
