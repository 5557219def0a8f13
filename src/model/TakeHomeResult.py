from dataclasses import dataclass


@dataclass(frozen=True)
class SocialInsuranceBreakdown:
    health: int
    pension: int
    employment: int
    total: int


@dataclass(frozen=True)
class TakeHomeResult:
    """Take-home breakdown for one salary. All amounts are in yen."""
    gross_annual: int
    employment_deduction: int
    total_income: int
    social_insurance: SocialInsuranceBreakdown
    income_tax: int  # includes the reconstruction surtax
    income_tax_marginal_rate: float
    reconstruction_surtax: int
    resident_tax: int
    total_deductions: int
    take_home_annual: int
    take_home_monthly: int
    take_home_rate: float  # percent, one decimal
