"""
Gap Analysis Service.

Category gaps:
  - categories with score < benchmark (default 75)
  - sorted ascending by score (worst first, stable for ties)
  - capped at ``limit`` entries (default 10); the cap decides which gaps get
    remediation timelines downstream

Section gaps (against a target score):
  gap = max(0, target - current)
  priority:  critical (>50)  high (>30)  medium (>15)  low
  effort:    high (>40)      medium (>20)              low
  timeframe: 6-12 months (>40)  3-6 months (>20)  1-3 months
"""
from __future__ import annotations

from collections.abc import Mapping

from compliance_engine.config import settings
from compliance_engine.schemas.framework import Framework
from compliance_engine.schemas.report import CategoryPerformance, Gap, SectionGap
from compliance_engine.services.scoring import score

SECTION_RECOMMENDATIONS: dict[str, list[str]] = {
    # NIST CSF functions
    "govern": [
        "Establish formal cybersecurity governance framework",
        "Define clear roles and responsibilities for cybersecurity",
        "Implement risk management strategy and procedures",
        "Develop cybersecurity policies aligned with business objectives",
    ],
    "identify": [
        "Complete comprehensive asset inventory and classification",
        "Conduct thorough risk assessments across all business functions",
        "Implement continuous asset discovery and monitoring",
        "Establish risk tolerance and acceptance criteria",
    ],
    "protect": [
        "Deploy identity and access management controls",
        "Implement data protection and encryption measures",
        "Establish security awareness training programs",
        "Deploy protective technologies and monitoring tools",
    ],
    "detect": [
        "Implement continuous monitoring capabilities",
        "Deploy security event detection and analysis tools",
        "Establish security operations center (SOC) capabilities",
        "Implement threat intelligence and anomaly detection",
    ],
    "respond": [
        "Develop comprehensive incident response plans",
        "Establish incident response team and procedures",
        "Implement communication and coordination protocols",
        "Conduct regular incident response exercises",
    ],
    "recover": [
        "Develop business continuity and disaster recovery plans",
        "Implement backup and recovery procedures",
        "Establish recovery time and point objectives",
        "Conduct regular recovery testing and validation",
    ],
    # CMMC Level 1 domains
    "access-control": [
        "Restrict system access to authorized users and devices",
        "Enforce role-based limits on transactions and functions",
        "Control connections to external systems",
        "Review information posted on publicly accessible systems",
    ],
    "identification-authentication": [
        "Maintain a unique identifier for every user, process and device",
        "Authenticate identities before granting system access",
        "Replace default and shared credentials",
    ],
    "media-protection": [
        "Sanitize or destroy media containing FCI before disposal or reuse",
        "Document media sanitization procedures",
    ],
    "physical-protection": [
        "Limit physical access to systems and operating environments",
        "Escort visitors and maintain visitor logs",
        "Manage physical access devices such as keys and badges",
    ],
    "system-communications-protection": [
        "Monitor and control communications at external boundaries",
        "Separate publicly accessible components into subnetworks",
    ],
    "system-information-integrity": [
        "Identify, report and correct system flaws in a timely manner",
        "Deploy and update malicious code protection",
        "Perform periodic and real-time scans of systems and files",
    ],
}

SECTION_BUSINESS_IMPACT: dict[str, str] = {
    "govern": "Lack of governance increases regulatory compliance risks and reduces executive oversight of cybersecurity initiatives",
    "identify": "Poor asset and risk visibility increases likelihood of undetected vulnerabilities and compliance gaps",
    "protect": "Inadequate protective measures significantly increase risk of successful cyberattacks and data breaches",
    "detect": "Limited detection capabilities result in longer dwell time for threats and increased incident impact",
    "respond": "Ineffective response capabilities lead to extended downtime and greater business disruption during incidents",
    "recover": "Poor recovery capabilities result in prolonged business disruption and potential revenue loss",
    "access-control": "Uncontrolled access to systems holding FCI puts federal contract eligibility at risk",
    "identification-authentication": "Unverified identities allow unauthorized users to reach contract information",
    "media-protection": "Improperly disposed media can leak federal contract information",
    "physical-protection": "Unrestricted physical access exposes systems and equipment to tampering and theft",
    "system-communications-protection": "Unmonitored network boundaries allow data exfiltration and intrusion",
    "system-information-integrity": "Unpatched flaws and malware exposure increase the likelihood of compromise",
}

DEFAULT_BUSINESS_IMPACT = "Implementation gap increases overall cybersecurity risk exposure"

SECTION_REQUIRED_ACTIONS: dict[str, list[str]] = {
    "govern": [
        "Appoint cybersecurity governance committee",
        "Develop cybersecurity strategy document",
        "Establish policy review and approval process",
        "Implement governance metrics and reporting",
    ],
    "identify": [
        "Deploy automated asset discovery tools",
        "Conduct comprehensive risk assessment",
        "Implement vulnerability management program",
        "Establish threat intelligence capabilities",
    ],
    "protect": [
        "Deploy multi-factor authentication",
        "Implement data loss prevention (DLP)",
        "Establish security training program",
        "Deploy endpoint protection platforms",
    ],
    "detect": [
        "Deploy SIEM/SOAR platforms",
        "Implement network monitoring tools",
        "Establish 24/7 monitoring capabilities",
        "Deploy threat hunting capabilities",
    ],
    "respond": [
        "Create incident response playbooks",
        "Establish incident response team",
        "Implement crisis communication plan",
        "Conduct tabletop exercises",
    ],
    "recover": [
        "Develop business continuity plans",
        "Implement backup and recovery systems",
        "Establish recovery testing schedule",
        "Create communication and coordination procedures",
    ],
    "access-control": [
        "Write a user access control policy",
        "Implement account provisioning and deprovisioning procedures",
        "Conduct quarterly access reviews",
    ],
    "identification-authentication": [
        "Build a user and device inventory",
        "Enforce password policy on all systems",
    ],
    "media-protection": [
        "Adopt a media sanitization standard",
        "Keep certificates of destruction",
    ],
    "physical-protection": [
        "Install badge or key access to server areas",
        "Introduce a visitor log and escort procedure",
    ],
    "system-communications-protection": [
        "Deploy and configure a boundary firewall",
        "Place public-facing services in a DMZ",
    ],
    "system-information-integrity": [
        "Establish a patch management schedule",
        "Deploy antivirus with automatic updates",
    ],
}


def improvement_needed(current: int, benchmark: int) -> int:
    return max(0, benchmark - current)


def find_gaps(
    categories: list[CategoryPerformance],
    benchmark: int | None = None,
    limit: int | None = None,
) -> list[Gap]:
    """Categories below the benchmark, worst first, capped at ``limit``."""
    benchmark = settings.GAP_BENCHMARK if benchmark is None else benchmark
    limit = settings.GAP_LIMIT if limit is None else limit

    below = sorted((c for c in categories if c.score < benchmark), key=lambda c: c.score)
    return [
        Gap(
            **c.model_dump(),
            improvement_needed=improvement_needed(c.score, benchmark),
        )
        for c in below[:limit]
    ]


def _section_priority(gap: int) -> str:
    if gap > 50:
        return "critical"
    if gap > 30:
        return "high"
    if gap > 15:
        return "medium"
    return "low"


def _section_effort(gap: int) -> str:
    if gap > 40:
        return "high"
    if gap > 20:
        return "medium"
    return "low"


def _section_timeframe(gap: int) -> str:
    if gap > 40:
        return "6-12 months"
    if gap > 20:
        return "3-6 months"
    return "1-3 months"


def analyze_section_gaps(
    framework: Framework,
    responses: Mapping[str, int],
    target_score: int | None = None,
) -> list[SectionGap]:
    """Compare every section against a target score; sections already at target are omitted."""
    target = settings.GAP_BENCHMARK if target_score is None else target_score
    out = []
    for section in framework.sections:
        current = score(section.questions, responses, framework.max_answer_value)
        gap = improvement_needed(current, target)
        if gap <= 0:
            continue
        out.append(SectionGap(
            section_id=section.id,
            section=section.name,
            current_score=current,
            target_score=target,
            gap=gap,
            priority=_section_priority(gap),
            estimated_effort=_section_effort(gap),
            timeframe=_section_timeframe(gap),
            recommendations=SECTION_RECOMMENDATIONS.get(section.id, []),
            business_impact=SECTION_BUSINESS_IMPACT.get(section.id, DEFAULT_BUSINESS_IMPACT),
            required_actions=SECTION_REQUIRED_ACTIONS.get(section.id, []),
        ))
    return out
