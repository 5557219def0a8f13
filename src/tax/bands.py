"""Helpers shared by the statutory detail classes.

Reference tables describe income bands as a list of ``{"maxIncome": ..}``
entries sorted ascending. A band's upper bound is inclusive.
"""

import json
import os
from typing import List, Optional

REFERENCE_DIR = os.path.normpath(os.path.join(os.path.dirname(__file__), '..', '..', 'reference'))


def reference_path(filename: str) -> str:
    return os.path.join(REFERENCE_DIR, filename)


def load_reference(filename: str, ref_path: Optional[str] = None) -> dict:
    """Load a JSON reference file, from ``ref_path`` if given."""
    path = ref_path or reference_path(filename)
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def require_tax_year(data: dict, filename: str) -> int:
    tax_year = data.get("taxYear")
    if not isinstance(tax_year, int):
        raise ValueError(f"{filename} must contain an integer 'taxYear'")
    return tax_year


def validate_bands(bands: List[dict], filename: str, section: str, open_ended: bool = False) -> None:
    """Check that band upper bounds are strictly ascending.

    When ``open_ended`` is set the final band must have a null ``maxIncome``.
    """
    if not bands:
        raise ValueError(f"{filename} must contain a non-empty '{section}' array")
    bounded = bands[:-1] if open_ended else bands
    if open_ended and bands[-1].get("maxIncome") is not None:
        raise ValueError(f"The last entry of '{section}' in {filename} must have a null 'maxIncome'")
    for i, band in enumerate(bounded):
        if band.get("maxIncome") is None:
            raise ValueError(f"Entry {i} of '{section}' in {filename} is missing 'maxIncome'")
        if i > 0 and band["maxIncome"] <= bounded[i - 1]["maxIncome"]:
            raise ValueError(
                f"'{section}' in {filename} must be sorted ascending by 'maxIncome'. "
                f"{band['maxIncome']} follows {bounded[i - 1]['maxIncome']}")


def band_amount(bands: List[dict], income: float) -> int:
    """Return the ``amount`` of the first band containing ``income``, or 0 above all bands."""
    for band in bands:
        if income <= band["maxIncome"]:
            return band["amount"]
    return 0
