"""Field metadata for result fields.

This module provides descriptions and short names for the fields of
ScenarioResult, YearProjection, SensitivityItem, TakeHomeResult and
WithdrawalYear.
Short names are used as column headers in report tables and as keys in the
MCP tool output descriptions.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass
class FieldInfo:
    """Metadata for a single field."""
    short_name: str  # Column header (unique, concise)
    description: str  # Full description of the field


# Field metadata dictionary mapping field names to their info
FIELD_METADATA: Dict[str, FieldInfo] = {
    # Scenario
    "label": FieldInfo("Scenario", "Scenario or what-if label"),
    "fire_number": FieldInfo("FIRE Number", "Net worth needed to reach financial independence (man-yen)"),
    "monthly_expense": FieldInfo("Monthly Expense", "Living cost plus post-FIRE insurance and pension per month"),
    "annual_expense": FieldInfo("Annual Expense", "Monthly expense times twelve"),
    "achievement_age": FieldInfo("FIRE Age", "Age at which assets first cover the target"),
    "achievement_years": FieldInfo("Years", "Years from now until assets cover the target"),

    # Projection
    "age": FieldInfo("Age", "Age at the start of the year"),
    "year": FieldInfo("Year", "Years elapsed since today"),
    "assets": FieldInfo("Assets", "Invested assets at the start of the year"),
    "target": FieldInfo("Target", "Inflation-adjusted FIRE number for the year"),
    "annual_investment": FieldInfo("Annual Investment", "Contribution added during the year"),

    # Sensitivity
    "description": FieldInfo("Change", "What the what-if changes"),
    "current_years": FieldInfo("Current Years", "Years to FIRE in the neutral scenario"),
    "new_years": FieldInfo("New Years", "Years to FIRE after the change"),
    "diff": FieldInfo("Difference", "Change in years; negative means sooner"),

    # Take-home
    "gross_annual": FieldInfo("Gross Salary", "Annual gross salary (yen)"),
    "employment_deduction": FieldInfo("Employment Deduction", "Employment income deduction"),
    "total_income": FieldInfo("Total Income", "Gross salary less the employment income deduction"),
    "health": FieldInfo("Health Insurance", "Employee share of health insurance"),
    "pension": FieldInfo("Pension", "Employee share of employees' pension insurance"),
    "employment": FieldInfo("Employment Insurance", "Employee share of employment insurance"),
    "social_insurance_total": FieldInfo("Social Insurance", "Health, pension and employment insurance combined"),
    "income_tax": FieldInfo("Income Tax", "National income tax including the reconstruction surtax"),
    "income_tax_marginal_rate": FieldInfo("Marginal Rate", "Income tax rate of the highest bracket reached, before the surtax"),
    "reconstruction_surtax": FieldInfo("Reconstruction Surtax", "Special income tax for reconstruction (2.1% of income tax)"),
    "resident_tax": FieldInfo("Resident Tax", "Local resident tax including per-capita levies"),
    "total_deductions": FieldInfo("Total Deductions", "Social insurance plus income and resident tax"),
    "take_home_annual": FieldInfo("Take Home", "Annual take-home pay"),
    "take_home_monthly": FieldInfo("Monthly Take Home", "Take-home pay per month (annual / 12)"),
    "take_home_rate": FieldInfo("Take Home Rate", "Take-home pay as a percentage of gross salary"),

    # Drawdown
    "withdrawal": FieldInfo("Withdrawal", "Inflation-adjusted withdrawal taken during the year"),
    "investment_return": FieldInfo("Return", "Investment return earned during the year"),
}


def get_short_name(field_name: str) -> str:
    """Get the short name for a field, or the field name if not found."""
    info = FIELD_METADATA.get(field_name)
    return info.short_name if info else field_name


def get_description(field_name: str) -> str:
    """Get the description for a field, or empty string if not found."""
    info = FIELD_METADATA.get(field_name)
    return info.description if info else ""


def get_field_info(field_name: str) -> FieldInfo | None:
    """Get the full FieldInfo for a field, or None if not found."""
    return FIELD_METADATA.get(field_name)


def wrap_header(text: str, max_width: int) -> list[str]:
    """Wrap a header text into multiple lines to fit within max_width.

    Words are split on spaces and distributed across lines to minimize
    the total number of lines while staying within max_width.

    Args:
        text: The header text to wrap
        max_width: Maximum width per line

    Returns:
        List of strings, each representing a line
    """
    if len(text) <= max_width:
        return [text]

    words = text.split()
    lines = []
    current_line = ""

    for word in words:
        if not current_line:
            current_line = word
        elif len(current_line) + 1 + len(word) <= max_width:
            current_line += " " + word
        else:
            lines.append(current_line)
            current_line = word

    if current_line:
        lines.append(current_line)

    return lines
