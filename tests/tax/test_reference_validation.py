"""Broken reference data must fail loudly when the detail classes load it."""

import os
import sys
import json
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))
from tax.IncomeTaxDetails import IncomeTaxDetails
from tax.ResidentTaxDetails import ResidentTaxDetails
from tax.SocialInsuranceDetails import SocialInsuranceDetails
from tax.bands import REFERENCE_DIR


def _reference(filename):
    with open(os.path.join(REFERENCE_DIR, filename), 'r', encoding='utf-8') as f:
        return json.load(f)


def _write(tmp_path, data):
    path = tmp_path / 'reference.json'
    path.write_text(json.dumps(data), encoding='utf-8')
    return str(path)


def test_missing_tax_year(tmp_path):
    data = _reference('social-insurance.json')
    del data['taxYear']
    with pytest.raises(ValueError, match='taxYear'):
        SocialInsuranceDetails(_write(tmp_path, data))


def test_unsorted_brackets(tmp_path):
    data = _reference('income-tax-details.json')
    data['brackets'][1], data['brackets'][2] = data['brackets'][2], data['brackets'][1]
    with pytest.raises(ValueError, match='ascending'):
        IncomeTaxDetails(_write(tmp_path, data))


def test_top_bracket_must_be_open(tmp_path):
    data = _reference('income-tax-details.json')
    data['brackets'][-1]['maxIncome'] = 99_000_000
    with pytest.raises(ValueError, match='null'):
        IncomeTaxDetails(_write(tmp_path, data))


def test_empty_basic_deduction(tmp_path):
    data = _reference('resident-tax-details.json')
    data['basicDeduction'] = []
    with pytest.raises(ValueError, match='basicDeduction'):
        ResidentTaxDetails(_write(tmp_path, data))


def test_missing_employment_deduction(tmp_path):
    data = _reference('income-tax-details.json')
    del data['employmentDeduction']
    with pytest.raises(ValueError, match='employmentDeduction'):
        IncomeTaxDetails(_write(tmp_path, data))


def test_valid_override_path_is_used(tmp_path):
    data = _reference('resident-tax-details.json')
    data['perCapitaLevy'] = 4_000
    rt = ResidentTaxDetails(_write(tmp_path, data))
    assert rt.fixed_levy == 5_000
