from dataclasses import dataclass

@dataclass
class IncomeTaxResult:
    totalIncomeTax: int
    marginalBracket: float
    reconstructionSurtax: int = 0
