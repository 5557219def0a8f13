import os
import sys
import pytest
from urllib.parse import parse_qs
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
from model.input_codec import input_from_params, input_from_query, input_from_spec, input_to_params, input_to_spec
from model.SimulationInput import SimulationDefaults


class TestQueryDecoding:
    def test_empty_query_gives_defaults(self):
        assert input_from_query("") == SimulationDefaults().to_input()

    def test_values_parsed(self):
        sim_input = input_from_query("?pref=osaka&income=650&assets=1200&invest=15&family=couple"
                                     "&housing=own&age=42&targetAge=55&return=0.05&swr=0.035"
                                     "&inflation=0.01&strategy=yield&yieldRate=0.04&expense=28.5"
                                     "&taxRate=0.2&insuranceCost=5")
        assert sim_input.prefecture == "osaka"
        assert sim_input.annual_income == 650
        assert sim_input.current_assets == 1200
        assert sim_input.monthly_investment == 15
        assert sim_input.family_type == "couple"
        assert sim_input.housing_type == "own"
        assert sim_input.current_age == 42
        assert sim_input.target_age == 55
        assert sim_input.annual_return_rate == pytest.approx(0.05)
        assert sim_input.swr == pytest.approx(0.035)
        assert sim_input.inflation_rate == pytest.approx(0.01)
        assert sim_input.fire_strategy == "yield"
        assert sim_input.yield_rate == pytest.approx(0.04)
        assert sim_input.custom_monthly_expense == pytest.approx(28.5)
        assert sim_input.dividend_tax_rate == pytest.approx(0.2)
        assert sim_input.post_fire_monthly_cost == 5

    def test_zero_falls_back_to_default(self):
        sim_input = input_from_params({"income": "0", "assets": "0", "return": "0"})
        assert sim_input.annual_income == 500
        assert sim_input.current_assets == 300
        assert sim_input.annual_return_rate == pytest.approx(0.04)

    def test_zero_tax_rate_is_honoured(self):
        assert input_from_params({"taxRate": "0"}).dividend_tax_rate == 0

    def test_unparseable_values_fall_back(self):
        sim_input = input_from_params({"income": "lots", "age": "", "expense": "n/a"})
        assert sim_input.annual_income == 500
        assert sim_input.current_age == 30
        assert sim_input.custom_monthly_expense is None

    def test_enum_flags_need_exact_match(self):
        sim_input = input_from_params({"strategy": "YIELD", "incomeType": "Net"})
        assert sim_input.fire_strategy == "withdrawal"
        assert sim_input.income_type == "gross"
        assert input_from_params({"incomeType": "net"}).income_type == "net"

    def test_zero_target_age_means_unset(self):
        assert input_from_params({"targetAge": "0"}).target_age is None

    def test_zero_insurance_cost_kept(self):
        assert input_from_params({"insuranceCost": "0"}).post_fire_monthly_cost == 0

    def test_custom_defaults(self):
        defaults = SimulationDefaults(prefecture="osaka", current_age=40)
        sim_input = input_from_params({}, defaults)
        assert sim_input.prefecture == "osaka"
        assert sim_input.current_age == 40


class TestQueryEncoding:
    def test_optional_fields_omitted(self):
        params = parse_qs(input_to_params(SimulationDefaults().to_input()))
        assert "targetAge" not in params
        assert "expense" not in params
        assert "insuranceCost" not in params
        assert params["income"] == ["500"]
        assert params["return"] == ["0.04"]

    def test_optional_fields_written(self):
        sim_input = SimulationDefaults().to_input().with_changes(
            target_age=50, custom_monthly_expense=25.5, post_fire_monthly_cost=0)
        params = parse_qs(input_to_params(sim_input))
        assert params["targetAge"] == ["50"]
        assert params["expense"] == ["25.5"]
        assert params["insuranceCost"] == ["0"]

    def test_shared_link_reproduces_input(self):
        sim_input = SimulationDefaults().to_input().with_changes(
            prefecture="fukuoka", current_assets=850, target_age=48, fire_strategy="yield")
        assert input_from_query(input_to_params(sim_input)) == sim_input


class TestSpecFiles:
    def test_spec_values_taken_as_written(self):
        sim_input = input_from_spec({"prefecture": "kyoto", "currentAssets": 0, "monthlyInvestment": 12})
        assert sim_input.prefecture == "kyoto"
        assert sim_input.current_assets == 0
        assert sim_input.monthly_investment == 12
        assert sim_input.swr == pytest.approx(0.04)

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="salary"):
            input_from_spec({"salary": 600})

    def test_spec_round_trip_omits_unset(self):
        spec = input_to_spec(SimulationDefaults().to_input())
        assert "targetAge" not in spec
        assert "customMonthlyExpense" not in spec
        assert input_from_spec(spec) == SimulationDefaults().to_input()
