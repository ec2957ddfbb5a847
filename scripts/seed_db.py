from __future__ import annotations

from _bootstrap import load_settings

from src.hr_portal.hr_portal.container import build_container


def main() -> None:
    settings = load_settings()
    container = build_container(settings=settings)
    try:
        report = container.seed_loader.load()
    finally:
        container.close()

    print(f"Seeded {container.backend.value} store:")
    print(f"  departments={report.departments} profiles={report.profiles} teams={report.teams}")
    print(f"  memberships={report.memberships} accounts={report.accounts} managers={report.managers}")
    for email, password in sorted(report.generated_passwords.items()):
        print(f"  generated password for {email}: {password}")
    for error in report.errors:
        print(f"  ERROR {error}")

    if not report.ok:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
