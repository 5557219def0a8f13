"""Conversions between SimulationInput and its external representations.

Two shapes are supported:

- URL query parameters with short keys (``pref``, ``income``, ``assets``...),
  used for shareable result links.
- ``spec.json`` program files with camelCase keys (``prefecture``,
  ``annualIncome``...), used by the command line and the MCP server.

Missing or unparseable values fall back to ``SimulationDefaults``. A query
value of 0 also falls back for the core numeric fields, matching how shared
links have always been read; the dividend tax rate is the exception and
honours an explicit 0.
"""

import math
from typing import Any, Dict, Mapping, Optional
from urllib.parse import parse_qsl, urlencode

from model.SimulationInput import SimulationDefaults, SimulationInput
from model.categories import FireStrategy, IncomeType


def _parse_number(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _number_or_default(value: Any, default: float) -> float:
    """Parsed value, or ``default`` when missing, unparseable or zero."""
    number = _parse_number(value)
    return number if number else default


def _as_int_if_whole(value: Optional[float]):
    if value is not None and float(value).is_integer():
        return int(value)
    return value


def _format_param(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def input_from_params(params: Mapping[str, str], defaults: Optional[SimulationDefaults] = None) -> SimulationInput:
    """Build a SimulationInput from URL query parameters."""
    d = defaults or SimulationDefaults()
    target_age = _parse_number(params.get("targetAge"))
    tax_rate = _parse_number(params.get("taxRate"))
    return SimulationInput(
        prefecture=params.get("pref") or d.prefecture,
        annual_income=_as_int_if_whole(_number_or_default(params.get("income"), d.annual_income)),
        income_type=IncomeType.NET.value if params.get("incomeType") == IncomeType.NET.value else IncomeType.GROSS.value,
        current_assets=_as_int_if_whole(_number_or_default(params.get("assets"), d.current_assets)),
        monthly_investment=_as_int_if_whole(_number_or_default(params.get("invest"), d.monthly_investment)),
        family_type=params.get("family") or d.family_type,
        housing_type=params.get("housing") or d.housing_type,
        current_age=_as_int_if_whole(_number_or_default(params.get("age"), d.current_age)),
        target_age=_as_int_if_whole(target_age) if target_age else None,
        annual_return_rate=_number_or_default(params.get("return"), d.annual_return_rate),
        swr=_number_or_default(params.get("swr"), d.swr),
        inflation_rate=_number_or_default(params.get("inflation"), d.inflation_rate),
        fire_strategy=FireStrategy.YIELD.value if params.get("strategy") == FireStrategy.YIELD.value else FireStrategy.WITHDRAWAL.value,
        yield_rate=_number_or_default(params.get("yieldRate"), d.yield_rate),
        custom_monthly_expense=_parse_number(params.get("expense")),
        dividend_tax_rate=tax_rate if tax_rate is not None else d.dividend_tax_rate,
        post_fire_monthly_cost=_parse_number(params.get("insuranceCost"))
    )


def input_to_params(input: SimulationInput) -> str:
    """Encode a SimulationInput as a URL query string."""
    p: Dict[str, Any] = {
        "pref": input.prefecture,
        "income": input.annual_income,
        "incomeType": input.income_type,
        "assets": input.current_assets,
        "invest": input.monthly_investment,
        "family": input.family_type,
        "housing": input.housing_type,
        "age": input.current_age,
    }
    if input.target_age:
        p["targetAge"] = input.target_age
    p["return"] = input.annual_return_rate
    p["swr"] = input.swr
    p["inflation"] = input.inflation_rate
    p["strategy"] = input.fire_strategy
    p["yieldRate"] = input.yield_rate
    if input.custom_monthly_expense is not None and input.custom_monthly_expense > 0:
        p["expense"] = input.custom_monthly_expense
    p["taxRate"] = input.dividend_tax_rate
    if input.post_fire_monthly_cost is not None and input.post_fire_monthly_cost >= 0:
        p["insuranceCost"] = input.post_fire_monthly_cost
    return urlencode({k: _format_param(v) for k, v in p.items()})


def input_from_query(query: str, defaults: Optional[SimulationDefaults] = None) -> SimulationInput:
    """Build a SimulationInput from a raw query string such as ``pref=osaka&income=600``."""
    return input_from_params(dict(parse_qsl(query.lstrip('?'))), defaults)


# spec.json key -> SimulationInput field
SPEC_KEYS = {
    "prefecture": "prefecture",
    "annualIncome": "annual_income",
    "incomeType": "income_type",
    "currentAssets": "current_assets",
    "monthlyInvestment": "monthly_investment",
    "familyType": "family_type",
    "housingType": "housing_type",
    "currentAge": "current_age",
    "targetAge": "target_age",
    "annualReturnRate": "annual_return_rate",
    "swr": "swr",
    "inflationRate": "inflation_rate",
    "fireStrategy": "fire_strategy",
    "yieldRate": "yield_rate",
    "customMonthlyExpense": "custom_monthly_expense",
    "dividendTaxRate": "dividend_tax_rate",
    "postFireMonthlyCost": "post_fire_monthly_cost",
}


def input_from_spec(spec: Mapping[str, Any], defaults: Optional[SimulationDefaults] = None) -> SimulationInput:
    """Build a SimulationInput from a spec.json dictionary.

    Unlike query parameters, spec values are taken as written (including 0);
    only absent keys fall back to defaults. Unknown keys raise ValueError.
    """
    unknown = [k for k in spec if k not in SPEC_KEYS]
    if unknown:
        raise ValueError(f"Unknown keys in spec: {unknown}. Expected any of {list(SPEC_KEYS)}")
    base = (defaults or SimulationDefaults()).to_input()
    return base.with_changes(**{SPEC_KEYS[k]: v for k, v in spec.items()})


def input_to_spec(input: SimulationInput) -> Dict[str, Any]:
    """Inverse of ``input_from_spec``; optional fields are omitted when unset."""
    spec = {}
    for key, attr in SPEC_KEYS.items():
        value = getattr(input, attr)
        if value is not None:
            spec[key] = value
    return spec
