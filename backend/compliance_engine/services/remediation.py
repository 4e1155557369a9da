"""
Remediation Phasing Service.

Every gap lands in exactly one phase; triggers are checked top-down and the
first match wins:

  Phase 1  priority high/critical OR gap > 50   1-3 months   effort high if gap > 60 else medium
  Phase 2  priority medium OR gap > 25          3-6 months   effort medium
  Phase 3  otherwise                            6-12 months  effort low

gap = benchmark - score. Expected impact is capped (default 25 points per item).
"""
from __future__ import annotations

from compliance_engine.config import settings
from compliance_engine.schemas.report import Gap, RemediationItem, RemediationPhase

PRIORITY_RANK = {"critical": 4, "high": 3, "medium": 2, "low": 1}

# Gap priorities come from sections (high/medium/low); the remediation plan
# uses the four-level vocabulary and escalates "high" to "critical".
REMEDIATION_PRIORITY = {
    "critical": "critical",
    "high": "critical",
    "medium": "medium",
    "low": "low",
}

PHASES = [
    {
        "number": 1,
        "title": "Immediate Actions",
        "description": "Critical security gaps requiring immediate attention",
        "timeframe": "0-3 months",
    },
    {
        "number": 2,
        "title": "Short-term Improvements",
        "description": "Important enhancements to strengthen security posture",
        "timeframe": "3-6 months",
    },
    {
        "number": 3,
        "title": "Long-term Optimization",
        "description": "Strategic improvements for advanced maturity",
        "timeframe": "6-12 months",
    },
]

CATEGORY_RESOURCES: dict[str, list[str]] = {
    "Asset Management": ["IT Team", "Security Team", "Asset Management Tool"],
    "Business Environment": ["Executive Team", "Risk Manager", "Compliance Officer"],
    "Governance": ["CISO", "Legal Team", "Board of Directors"],
    "Risk Assessment": ["Risk Manager", "Security Analyst", "External Consultant"],
    "Access Control": ["IT Team", "Identity Management System", "Security Team"],
    "Awareness and Training": ["HR Team", "Training Platform", "Security Team"],
    "Data Security": ["Data Protection Officer", "Encryption Tools", "Backup Systems"],
    "Information Protection": ["Security Team", "DLP Solution", "Classification Tools"],
    "Maintenance": ["IT Operations", "Patch Management System", "Change Control"],
    "Protective Technology": ["Security Team", "Firewall", "Endpoint Protection"],
    "Anomalies and Events": ["SOC Team", "SIEM System", "Monitoring Tools"],
    "Security Continuous Monitoring": ["Security Analyst", "Monitoring Platform", "Dashboards"],
    "Detection Processes": ["Incident Response Team", "Detection Tools", "Playbooks"],
    "Response Planning": ["Incident Response Team", "Communication Plan", "Legal Team"],
    "Communications": ["PR Team", "Communication Tools", "Stakeholder List"],
    "Analysis": ["Forensics Team", "Analysis Tools", "External Experts"],
    "Mitigation": ["Technical Team", "Containment Tools", "Recovery Procedures"],
    "Improvements": ["Process Owner", "Lessons Learned", "Training Updates"],
    "Recovery Planning": ["Business Continuity Team", "Backup Systems", "Recovery Sites"],
    "Identification and Authentication": ["IT Team", "Directory Service", "Security Team"],
    "Media Protection": ["IT Operations", "Media Sanitization Tools", "Facilities Team"],
    "Physical Protection": ["Facilities Team", "Badge Access System", "Security Team"],
    "System and Communications Protection": ["Network Team", "Firewall", "Security Team"],
    "System and Information Integrity": ["IT Operations", "Patch Management System", "Endpoint Protection"],
}

DEFAULT_RESOURCES = ["Security Team", "IT Team", "Management"]


def resources_for(category: str) -> list[str]:
    return list(CATEGORY_RESOURCES.get(category, DEFAULT_RESOURCES))


def _assign_phase(priority: str, gap_size: int) -> tuple[int, str, str]:
    """Return (phase, timeline, effort)."""
    if priority in ("high", "critical") or gap_size > 50:
        return 1, "1-3 months", "high" if gap_size > 60 else "medium"
    if priority == "medium" or gap_size > 25:
        return 2, "3-6 months", "medium"
    return 3, "6-12 months", "low"


def phase(
    gaps: list[Gap],
    benchmark: int | None = None,
    impact_cap: int | None = None,
) -> list[RemediationItem]:
    """Turn gaps into remediation items ordered by phase, critical first within a phase."""
    benchmark = settings.GAP_BENCHMARK if benchmark is None else benchmark
    impact_cap = settings.REMEDIATION_IMPACT_CAP if impact_cap is None else impact_cap

    items = []
    for index, gap in enumerate(gaps):
        gap_size = max(0, benchmark - gap.score)
        number, timeline, effort = _assign_phase(gap.priority, gap_size)
        items.append(RemediationItem(
            id=f"remediation-{index}",
            title=f"Improve {gap.category}",
            description=(
                f"Address security gaps in {gap.category.lower()} "
                "to reach target maturity level"
            ),
            priority=REMEDIATION_PRIORITY[gap.priority],
            effort=effort,
            timeline=timeline,
            phase=number,
            expected_impact=f"+{min(gap_size, impact_cap)}% improvement",
            resources=resources_for(gap.category),
        ))

    return sorted(items, key=lambda i: (i.phase, -PRIORITY_RANK[i.priority]))


def group_by_phase(items: list[RemediationItem]) -> list[RemediationPhase]:
    """Bucket items under the three fixed phases (empty phases included)."""
    return [
        RemediationPhase(**p, items=[i for i in items if i.phase == p["number"]])
        for p in PHASES
    ]
