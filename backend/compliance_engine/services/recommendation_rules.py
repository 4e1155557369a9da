"""
Framework-specific recommendation rules.

Each framework id maps to a ``RecommendationRules`` entry: a pure template
function that returns the content fields of a recommendation (title, steps,
resources, business value ...) plus the severity tables the engine uses to
fill ``impact`` and ``risk_reduction``. Unknown framework ids use
``GENERIC_RULES``.

Severity tables are indexed by the response value: ``(not implemented,
partially implemented)``.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from compliance_engine.schemas.framework import Category, Framework, Question, Section

TemplateFn = Callable[[Framework, Section, Category, Question, int], dict]


@dataclass(frozen=True)
class RecommendationRules:
    template: TemplateFn
    impact: tuple[int, int]
    risk_reduction: tuple[int, int]
    compliance_impact: Callable[[Framework], list[str]]

    def impact_for(self, response: int) -> int:
        return self.impact[0] if response == 0 else self.impact[1]

    def risk_reduction_for(self, response: int) -> int:
        return self.risk_reduction[0] if response == 0 else self.risk_reduction[1]


# ═══════════════════ Generic ═══════════════════

def generic_template(framework, section, category, question, response) -> dict:
    name = category.name.lower()
    return {
        "title": f"Improve {category.name}",
        "description": f"Address gaps in {name} to enhance overall security posture.",
        "priority": "high" if response == 0 else "medium",
        "effort": "medium",
        "timeframe": "1-3 months",
        "cost": "low",
        "resources": [
            {
                "type": "documentation",
                "name": "Best Practices Guide",
                "description": f"Industry best practices for {name}",
            },
        ],
        "steps": [
            "Assess current state",
            "Develop improvement plan",
            "Implement changes",
            "Monitor and validate",
        ],
        "business_value": "Improves security posture and reduces risk exposure",
        "success_metrics": ["Improved assessment scores", "Reduced security incidents"],
    }


# ═══════════════════ NIST CSF ═══════════════════

NIST_TEMPLATES: dict[str, dict] = {
    "identify-asset-management": {
        "title": "Implement Comprehensive Asset Management",
        "description": (
            "Deploy an automated asset discovery and inventory management system "
            "to maintain real-time visibility of all organizational assets."
        ),
        "priority": "high",
        "effort": "medium",
        "timeframe": "3-6 months",
        "cost": "medium",
        "resources": [
            {"type": "tool", "name": "Asset Management Tool",
             "description": "Automated network discovery and asset inventory"},
            {"type": "template", "name": "Asset Inventory Template",
             "description": "Standardized asset tracking spreadsheet"},
        ],
        "steps": [
            "Deploy network discovery tools",
            "Establish asset classification scheme",
            "Implement automated inventory updates",
            "Train staff on asset management procedures",
        ],
        "business_value": "Improves security visibility and incident response capabilities",
    },
    "protect-access-control": {
        "title": "Strengthen Identity and Access Management",
        "description": (
            "Implement multi-factor authentication and role-based access controls "
            "across all systems."
        ),
        "priority": "critical",
        "effort": "high",
        "timeframe": "2-4 months",
        "cost": "medium",
        "resources": [
            {"type": "tool", "name": "Identity Management System",
             "description": "Enterprise identity and access management"},
            {"type": "training", "name": "IAM Best Practices Training",
             "description": "Staff training on access control principles"},
        ],
        "steps": [
            "Audit current access permissions",
            "Implement MFA for all users",
            "Establish role-based access controls",
            "Regular access reviews and cleanup",
        ],
        "business_value": "Prevents unauthorized access and reduces breach risk",
    },
}


def nist_template(framework, section, category, question, response) -> dict:
    entry = NIST_TEMPLATES.get(f"{section.id}-{category.id}")
    if entry is None:
        return generic_template(framework, section, category, question, response)
    return {
        **entry,
        "success_metrics": [
            "Reduced security incidents",
            "Improved audit scores",
            "Faster incident response",
        ],
    }


# ═══════════════════ ISO 27001 ═══════════════════

def iso27001_template(framework, section, category, question, response) -> dict:
    return {
        "title": f"Enhance {category.name} Controls",
        "description": (
            f"Implement ISO 27001 compliant controls for {category.name.lower()} "
            "to meet certification requirements."
        ),
        "priority": "critical" if response == 0 else "high",
        "effort": "medium",
        "timeframe": "2-6 months",
        "cost": "medium",
        "resources": [
            {"type": "documentation", "name": "ISO 27001 Control Templates",
             "description": "Ready-to-use policy and procedure templates"},
            {"type": "consultant", "name": "ISO 27001 Consultant",
             "description": "Expert guidance for certification preparation"},
        ],
        "steps": [
            "Gap analysis against ISO 27001 requirements",
            "Develop required policies and procedures",
            "Implement technical controls",
            "Staff training and awareness",
            "Internal audit and review",
        ],
        "business_value": "Enables ISO 27001 certification and improves customer trust",
        "success_metrics": ["Certification readiness", "Improved security posture"],
    }


# ═══════════════════ CMMC ═══════════════════

def cmmc_template(framework, section, category, question, response) -> dict:
    return {
        "title": f"Achieve CMMC {category.name} Requirements",
        "description": (
            f"Implement CMMC 2.0 Level 2 controls for {category.name.lower()} "
            "to maintain Military contract eligibility."
        ),
        "priority": "critical",
        "effort": "high",
        "timeframe": "3-9 months",
        "cost": "high",
        "resources": [
            {"type": "consultant", "name": "CMMC Consultant",
             "description": "Certified CMMC Professional guidance"},
            {"type": "tool", "name": "CMMC Compliance Platform",
             "description": "Automated CMMC assessment and monitoring"},
        ],
        "steps": [
            "CMMC gap assessment",
            "Develop System Security Plan (SSP)",
            "Implement required controls",
            "Evidence collection and documentation",
            "Third-party assessment preparation",
        ],
        "business_value": "Maintains Military contract eligibility",
        "success_metrics": ["CMMC certification", "Reduced CUI exposure risk"],
    }


# ═══════════════════ Registry ═══════════════════

GENERIC_RULES = RecommendationRules(
    template=generic_template,
    impact=(15, 8),
    risk_reduction=(20, 10),
    compliance_impact=lambda fw: [fw.name],
)

NIST_RULES = RecommendationRules(
    template=nist_template,
    impact=(25, 15),
    risk_reduction=(25, 15),
    compliance_impact=lambda fw: ["NIST CSF", "SOC 2", "ISO 27001"],
)

ISO27001_RULES = RecommendationRules(
    template=iso27001_template,
    impact=(20, 12),
    risk_reduction=(25, 15),
    compliance_impact=lambda fw: ["ISO 27001", "GDPR", "SOC 2"],
)

CMMC_RULES = RecommendationRules(
    template=cmmc_template,
    impact=(25, 15),
    risk_reduction=(25, 15),
    compliance_impact=lambda fw: ["CMMC 2.0 Level 2", "NIST SP 800-171", "DFARS"],
)

RULES_BY_FRAMEWORK: dict[str, RecommendationRules] = {
    "nist": NIST_RULES,
    "iso27001": ISO27001_RULES,
    "cmmc": CMMC_RULES,
    "cmmc-2.0-level1": CMMC_RULES,
    "cmmc-level1": CMMC_RULES,
}


def rules_for(framework_id: str) -> RecommendationRules:
    return RULES_BY_FRAMEWORK.get(framework_id, GENERIC_RULES)
