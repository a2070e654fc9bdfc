# file: phonefmt/core/audit.py
"""
Registry consistency audit.

Cross-checks registry records against libphonenumber metadata shipped with the
`phonenumbers` library. The audit is informational: it reports issues and
never changes the registry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

import phonenumbers

from phonefmt.core.registry import CountryRecord, Registry

logger = logging.getLogger(__name__)

IssueKind = Literal["unknown_region", "dial_code_mismatch"]


@dataclass(frozen=True, slots=True)
class AuditIssue:
    iso2: str
    name: str
    dial_code: str
    kind: IssueKind
    detail: str

    def to_dict(self) -> dict[str, str]:
        return {
            "iso2": self.iso2,
            "name": self.name,
            "dial_code": self.dial_code,
            "kind": self.kind,
            "detail": self.detail,
        }


def check_record(record: CountryRecord) -> AuditIssue | None:
    """
    Compare one record with libphonenumber's calling code for its region.

    North American dial codes such as "+1242" are accepted as long as they
    start with the region's calling code.
    """

    calling_code = phonenumbers.country_code_for_region(record.iso2.upper())
    if not calling_code:
        return AuditIssue(
            iso2=record.iso2,
            name=record.name,
            dial_code=record.dial_code,
            kind="unknown_region",
            detail=f"libphonenumber has no metadata for region {record.iso2}",
        )

    if not record.dial_code_digits.startswith(str(calling_code)):
        return AuditIssue(
            iso2=record.iso2,
            name=record.name,
            dial_code=record.dial_code,
            kind="dial_code_mismatch",
            detail=f"libphonenumber calling code for {record.iso2} is +{calling_code}",
        )
    return None


def audit_registry(registry: Registry) -> list[AuditIssue]:
    """Return an issue for every record that disagrees with libphonenumber."""

    issues: list[AuditIssue] = []
    for record in registry:
        issue = check_record(record)
        if issue is not None:
            issues.append(issue)
    logger.info("Audited %d records, %d issue(s)", len(registry), len(issues))
    return issues
