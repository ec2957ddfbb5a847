from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..core.exceptions import StoreError
from ..store.repository import CollectionStore, Record
from .accounts import AccountRegistry
from .fixtures import DEMO_FIXTURES, DemoUser, SeedFixtures

logger = logging.getLogger(__name__)


@dataclass
class SeedReport:
    departments: int = 0
    profiles: int = 0
    teams: int = 0
    memberships: int = 0
    accounts: int = 0
    managers: int = 0
    errors: list[str] = field(default_factory=list)
    # Only passwords generated during this run (never the configured one).
    generated_passwords: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


class SeedLoader:
    """Writes the demo organisation through sequential store calls.

    Re-running is safe: departments and teams are matched by name, profiles and
    accounts by email, memberships by (team, profile).
    """

    def __init__(
        self,
        store: CollectionStore,
        accounts: Optional[AccountRegistry] = None,
        *,
        password: Optional[str] = None,
    ):
        self._store = store
        self._accounts = accounts
        self._password = password

    def _ensure_account(self, user: DemoUser, report: SeedReport, *, profile_id: Any = None) -> Any:
        """Create or refresh the login of ``user``; returns the account id.

        ``None`` means the registry left an existing account untouched, so the
        password sent with the request was not applied and is not reported.
        """
        password = self._password or secrets.token_urlsafe(12)
        try:
            account_id = self._accounts.ensure_account(user, password, profile_id=profile_id)
        except StoreError as e:
            report.errors.append(f"account {user.email}: {e.message}")
            return None
        if account_id is None:
            return None
        report.accounts += 1
        if not self._password:
            report.generated_passwords[user.email] = password
        return account_id

    def _find_one(self, table: str, filters: Mapping[str, Any]) -> Optional[Record]:
        rows = self._store.select(table, filters=filters, limit=1)
        return rows[0] if rows else None

    def _ensure(self, table: str, key: Mapping[str, Any], record: Mapping[str, Any]) -> Record:
        existing = self._find_one(table, key)
        if existing:
            return existing
        return self._store.insert(table, {**key, **record})

    def load(self, fixtures: SeedFixtures = DEMO_FIXTURES) -> SeedReport:
        report = SeedReport()

        for dept in fixtures.departments:
            try:
                self._ensure("departments", {"name": dept.name}, dept.record())
                report.departments += 1
            except StoreError as e:
                report.errors.append(f"department {dept.name}: {e.message}")

        profile_ids: dict[str, Any] = {}
        for user in fixtures.users:
            profile_id = self._seed_user(user, report)
            if profile_id is not None:
                profile_ids[user.email] = profile_id

        for user in fixtures.users:
            if not user.manager_email or user.manager_email not in profile_ids or user.email not in profile_ids:
                continue
            try:
                self._store.update(
                    "profiles", {"manager_id": profile_ids[user.manager_email]}, filters={"email": user.email}
                )
                report.managers += 1
            except StoreError as e:
                report.errors.append(f"manager of {user.email}: {e.message}")

        for team in fixtures.teams:
            try:
                row = self._ensure(
                    "teams",
                    {"name": team.name},
                    {
                        "department": team.department,
                        "description": team.description,
                        "lead_id": profile_ids.get(team.lead_email),
                    },
                )
                report.teams += 1
            except StoreError as e:
                report.errors.append(f"team {team.name}: {e.message}")
                continue

            members = [(team.lead_email, "lead")] + [(email, "member") for email in team.member_emails]
            for email, role in members:
                if email not in profile_ids:
                    continue
                try:
                    self._ensure(
                        "team_members",
                        {"team_id": row["id"], "profile_id": profile_ids[email]},
                        {"role": role},
                    )
                    report.memberships += 1
                except StoreError as e:
                    report.errors.append(f"member {email} of {team.name}: {e.message}")

        logger.info(
            "Seed done: %d departments, %d profiles, %d teams, %d memberships, %d accounts, %d errors",
            report.departments,
            report.profiles,
            report.teams,
            report.memberships,
            report.accounts,
            len(report.errors),
        )
        return report

    def _seed_user(self, user: DemoUser, report: SeedReport) -> Any:
        account_id = None
        if self._accounts is not None and self._accounts.provides_profile_id:
            account_id = self._ensure_account(user, report)

        record = user.profile_record()
        key = {"email": record.pop("email")}
        try:
            existing = self._find_one("profiles", key)
            if existing:
                rows = self._store.update("profiles", record, filters=key)
                profile = rows[0] if rows else existing
            else:
                if account_id is not None:
                    record["id"] = account_id
                profile = self._store.insert("profiles", {**key, **record})
            report.profiles += 1
        except StoreError as e:
            report.errors.append(f"profile {user.email}: {e.message}")
            return None

        if self._accounts is not None and not self._accounts.provides_profile_id:
            self._ensure_account(user, report, profile_id=profile.get("id"))

        return profile.get("id")
