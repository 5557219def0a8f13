import sys
import os
import json
import argparse
from model.input_codec import input_from_query, input_from_spec
from model.categories import FamilyPattern, ScenarioKey
from calc.assumptions import default_assumptions
from calc.simulation_calculator import run_simulation
from calc.take_home import calc_take_home, build_income_table
from calc.withdrawal_calculator import withdrawal_after_fire
from render.renderers import ProjectionRenderer, RENDERER_REGISTRY, parse_age_range


def load_spec(program_name: str, base_path: str = None) -> dict:
    """Load input-parameters/<program_name>/spec.json.

    Returns None when the file does not exist.
    """
    base = base_path or os.path.join(os.path.dirname(__file__), '..', 'input-parameters')
    spec_path = os.path.join(base, program_name, 'spec.json')
    if not os.path.exists(spec_path):
        return None
    with open(spec_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def main():
    parser = argparse.ArgumentParser(
        description='FIRE (financial independence, retire early) simulator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  Summary      Print household, expenses and the neutral FIRE result (default)
  Scenarios    Print the optimistic / neutral / pessimistic comparison
  Projection   Print the year-by-year asset projection of one scenario
  Sensitivity  Print how single changes move the FIRE date
  TakeHome     Print the take-home breakdown for --gross yen
  IncomeTable  Print take-home pay for every supported salary level
  Withdrawal   Print how long the assets last after the neutral FIRE date

Examples:
  python src/Program.py sample
  python src/Program.py sample --mode Scenarios
  python src/Program.py sample --mode Projection --scenario pessimistic --ages 30-50
  python src/Program.py --query "pref=osaka&income=600&assets=500" --mode Summary
  python src/Program.py --mode TakeHome --gross 6000000 --family couple
  python src/Program.py --mode IncomeTable --family couple-child1
  python src/Program.py sample --mode Withdrawal
        """
    )
    parser.add_argument('program_name', nargs='?', help='Name of the program (folder in input-parameters)')
    parser.add_argument('--mode', '-m',
                        choices=list(RENDERER_REGISTRY.keys()),
                        default='Summary',
                        help='Output mode (default: Summary)')
    parser.add_argument('--query', '-q',
                        help='Build the input from a query string such as "pref=osaka&income=600"')
    parser.add_argument('--scenario', '-s',
                        choices=[key.value for key in ScenarioKey],
                        default=ScenarioKey.NEUTRAL.value,
                        help='Scenario shown in Projection mode (default: neutral)')
    parser.add_argument('--ages', '-a',
                        help="Age range for Projection mode, e.g. '30-50', '40-' or '-45'")
    parser.add_argument('--gross', type=int,
                        help='Gross annual salary in yen for TakeHome mode')
    parser.add_argument('--family', '-f',
                        choices=[p.value for p in FamilyPattern],
                        default=FamilyPattern.SINGLE.value,
                        help='Household pattern for TakeHome and IncomeTable modes')

    args = parser.parse_args()

    if args.mode == 'TakeHome':
        if args.gross is None:
            parser.error("--gross is required for TakeHome mode")
        if args.gross <= 0:
            parser.error("--gross must be a positive number of yen")
        RENDERER_REGISTRY['TakeHome']().render(calc_take_home(args.gross, args.family))
        return

    if args.mode == 'IncomeTable':
        RENDERER_REGISTRY['IncomeTable']().render(build_income_table(args.family))
        return

    if args.query is not None:
        sim_input = input_from_query(args.query, default_assumptions().defaults)
    else:
        if not args.program_name:
            parser.error("program_name is required (or use --query to describe the household inline)")
        spec = load_spec(args.program_name)
        if spec is None:
            spec_path = os.path.join('input-parameters', args.program_name, 'spec.json')
            print(f"Spec file not found: {spec_path}")
            sys.exit(1)
        sim_input = input_from_spec(spec, default_assumptions().defaults)

    result = run_simulation(sim_input)

    if args.mode == 'Withdrawal':
        drawdown = withdrawal_after_fire(result)
        if drawdown is None:
            print(f"FIRE is not reached within {result.neutral.yearly_projection[-1].year} years; "
                  "there is no drawdown to simulate")
            return
        RENDERER_REGISTRY['Withdrawal']().render(drawdown)
        return

    if args.mode == 'Projection':
        start_age, end_age = None, None
        if args.ages:
            projection = result.scenarios[args.scenario].yearly_projection
            start_age, end_age = parse_age_range(args.ages, projection)
        renderer = ProjectionRenderer(args.scenario, start_age, end_age)
    else:
        renderer = RENDERER_REGISTRY[args.mode]()
    renderer.render(result)


if __name__ == "__main__":
    main()
