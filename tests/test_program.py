import os
import sys
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
import Program
from Program import load_spec, main


def run_main(monkeypatch, *args):
    monkeypatch.setattr(sys, 'argv', ['Program.py', *args])
    main()


def test_load_spec_sample():
    spec = load_spec('sample')
    assert spec['prefecture'] == 'tokyo'
    assert spec['annualIncome'] == 600


def test_load_spec_missing_returns_none():
    assert load_spec('no-such-program') is None


def test_load_spec_custom_base(tmp_path):
    program_dir = tmp_path / 'mine'
    program_dir.mkdir()
    (program_dir / 'spec.json').write_text('{"prefecture": "kyoto"}', encoding='utf-8')
    assert load_spec('mine', str(tmp_path)) == {"prefecture": "kyoto"}


def test_summary_is_default_mode(monkeypatch, capsys):
    run_main(monkeypatch, 'sample')
    out = capsys.readouterr().out
    assert "FIRE SIMULATION SUMMARY" in out
    assert "東京都" in out


@pytest.mark.parametrize("mode,heading", [
    ('Scenarios', "SCENARIO COMPARISON"),
    ('Projection', "ASSET PROJECTION"),
    ('Sensitivity', "SENSITIVITY ANALYSIS"),
])
def test_simulation_modes(monkeypatch, capsys, mode, heading):
    run_main(monkeypatch, 'osaka-couple', '--mode', mode)
    assert heading in capsys.readouterr().out


def test_projection_with_scenario_and_ages(monkeypatch, capsys):
    run_main(monkeypatch, 'sample', '--mode', 'Projection', '--scenario', 'optimistic', '--ages', '30-32')
    out = capsys.readouterr().out
    assert "楽観" in out
    rows = [line.split()[0] for line in out.splitlines() if line.startswith("  3")]
    assert rows == ["30", "31", "32"]


def test_query_input(monkeypatch, capsys):
    run_main(monkeypatch, '--query', 'pref=hokkaido&family=couple')
    out = capsys.readouterr().out
    assert "北海道" in out
    assert "夫婦" in out


def test_missing_spec_exits(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        run_main(monkeypatch, 'no-such-program')
    assert exc.value.code == 1
    assert "Spec file not found" in capsys.readouterr().out


def test_program_name_required_without_query(monkeypatch):
    with pytest.raises(SystemExit) as exc:
        run_main(monkeypatch)
    assert exc.value.code == 2


def test_take_home_mode(monkeypatch, capsys):
    run_main(monkeypatch, '--mode', 'TakeHome', '--gross', '6000000', '--family', 'couple')
    out = capsys.readouterr().out
    assert "TAKE HOME PAY" in out
    assert "6,000,000円" in out


def test_take_home_requires_gross(monkeypatch):
    with pytest.raises(SystemExit) as exc:
        run_main(monkeypatch, '--mode', 'TakeHome')
    assert exc.value.code == 2


def test_take_home_rejects_non_positive_gross(monkeypatch):
    with pytest.raises(SystemExit) as exc:
        run_main(monkeypatch, '--mode', 'TakeHome', '--gross', '0')
    assert exc.value.code == 2


def test_income_table_mode(monkeypatch, capsys):
    run_main(monkeypatch, '--mode', 'IncomeTable', '--family', 'couple-child1')
    assert "TAKE HOME BY SALARY" in capsys.readouterr().out


def test_unknown_mode_rejected(monkeypatch):
    with pytest.raises(SystemExit):
        run_main(monkeypatch, 'sample', '--mode', 'TaxDetails')
    assert 'TaxDetails' not in Program.RENDERER_REGISTRY


def test_withdrawal_mode(monkeypatch, capsys):
    run_main(monkeypatch, 'sample', '--mode', 'Withdrawal')
    out = capsys.readouterr().out
    assert "DRAWDOWN AFTER FIRE" in out
    assert "Assets" in out


def test_withdrawal_mode_without_fire(monkeypatch, capsys):
    run_main(monkeypatch, '--query', 'swr=0.0001&assets=1&invest=1', '--mode', 'Withdrawal')
    assert "there is no drawdown to simulate" in capsys.readouterr().out
