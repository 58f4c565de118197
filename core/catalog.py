# core/catalog.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

# -------------------------------------------------------------------
# Static reference data (immutable for the process lifetime)
# -------------------------------------------------------------------


@dataclass(frozen=True)
class Role:
    value: str
    label: str


@dataclass(frozen=True)
class CareerField:
    value: str
    label: str
    roles: Tuple[Role, ...]


FIELDS_AND_ROLES: Tuple[CareerField, ...] = (
    CareerField(
        value="tech",
        label="Technology",
        roles=(
            Role("software_engineer", "Software Engineer"),
            Role("data_scientist", "Data Scientist"),
            Role("data_analyst", "Data Analyst"),
            Role("product_manager", "Product Manager (Tech)"),
            Role("ux_ui_designer", "UX/UI Designer"),
            Role("devops_engineer", "DevOps Engineer"),
            Role("cybersecurity_analyst", "Cybersecurity Analyst"),
            Role("machine_learning_engineer", "Machine Learning Engineer"),
        ),
    ),
    CareerField(
        value="finance",
        label="Finance",
        roles=(
            Role("financial_analyst", "Financial Analyst"),
            Role("investment_banking_analyst", "Investment Banking Analyst"),
            Role("accountant", "Accountant"),
            Role("risk_manager", "Risk Manager"),
            Role("quantitative_analyst", "Quantitative Analyst (Quant)"),
            Role("portfolio_manager", "Portfolio Manager (Assistant)"),
        ),
    ),
    CareerField(
        value="marketing",
        label="Marketing",
        roles=(
            Role("digital_marketing_specialist", "Digital Marketing Specialist"),
            Role("social_media_manager", "Social Media Manager"),
            Role("content_creator", "Content Creator/Writer"),
            Role("seo_specialist", "SEO Specialist"),
            Role("marketing_analyst", "Marketing Analyst"),
        ),
    ),
    CareerField(
        value="healthcare",
        label="Healthcare",
        roles=(
            Role("research_assistant_bio", "Research Assistant (Biology/Medical)"),
            Role("healthcare_administrator_intern", "Healthcare Administrator Intern"),
            Role("public_health_intern", "Public Health Intern"),
            Role("clinical_data_analyst", "Clinical Data Analyst (Entry)"),
        ),
    ),
)

SA_CITIES: Tuple[str, ...] = (
    "Johannesburg",
    "Cape Town",
    "Durban",
    "Pretoria",
    "Port Elizabeth",
    "Bloemfontein",
)

__all__ = [
    "Role",
    "CareerField",
    "FIELDS_AND_ROLES",
    "SA_CITIES",
    "find_field",
    "get_roles_for_field",
    "get_role_label",
    "get_field_label",
]


# -------------------------------------------------------------------
# Lookups
# -------------------------------------------------------------------
def find_field(field_value: str) -> Optional[CareerField]:
    for field in FIELDS_AND_ROLES:
        if field.value == field_value:
            return field
    return None


def get_roles_for_field(field_value: str) -> List[Role]:
    field = find_field(field_value)
    return list(field.roles) if field else []


def get_role_label(role_value: str) -> str:
    """Display label for a role id; unknown ids are returned unchanged."""
    for field in FIELDS_AND_ROLES:
        for role in field.roles:
            if role.value == role_value:
                return role.label
    return role_value


def get_field_label(field_value: str) -> str:
    field = find_field(field_value)
    return field.label if field else field_value
