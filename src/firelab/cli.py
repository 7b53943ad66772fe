"""
Command-line interface for FireLab.

Input files are JSON documents with an ``inputs`` section (FinancialInputs
fields) and an optional ``monte_carlo`` section (MonteCarloInputs fields).
Missing fields take their defaults.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict

from firelab import (
    ConfigError,
    FinancialInputs,
    MonteCarloInputs,
    NumpyEncoder,
    __version__,
    project,
    simulate,
    simulate_with_logs,
    validate_inputs,
)


def _load_json(path: str) -> dict:
    """Load JSON from file path."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _save_json(path: str, data: dict) -> None:
    """Save data as JSON to file path."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, cls=NumpyEncoder)


def _emit(data: dict, output: str | None) -> None:
    if output:
        _save_json(output, data)
        print(f"✅ Results written to {output}")
    else:
        json.dump(data, sys.stdout, indent=2, cls=NumpyEncoder)
        sys.stdout.write("\n")


def _read_config(path: str) -> tuple[FinancialInputs, MonteCarloInputs]:
    cfg = _load_json(path)
    if not isinstance(cfg, dict):
        raise ConfigError("Input file must contain a JSON object")
    unknown = sorted(set(cfg) - {"inputs", "monte_carlo"})
    if unknown:
        raise ConfigError(f"Unknown top-level sections: {unknown}")
    inputs = FinancialInputs.from_dict(cfg.get("inputs", {}))
    mc_inputs = MonteCarloInputs.from_dict(cfg.get("monte_carlo", {}))
    return inputs, mc_inputs


def cmd_example(_) -> int:
    """Print a complete input document with default values."""
    example = {
        "inputs": FinancialInputs().to_dict(),
        "monte_carlo": MonteCarloInputs().to_dict(),
    }
    json.dump(example, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def cmd_validate(args) -> int:
    """Validate the inputs of a JSON document."""
    try:
        inputs, mc_inputs = _read_config(args.input)
        mc_inputs.validate()
        report = validate_inputs(inputs, args.current_year)
    except (OSError, json.JSONDecodeError, ConfigError, TypeError) as e:
        print(f"Validation failed: {e}", file=sys.stderr)
        return 1

    if args.format == "json":
        json.dump(report.to_dict(), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print(report)
    return report.get_exit_code()


def cmd_project(args) -> int:
    """Run the deterministic projection."""
    try:
        inputs, _ = _read_config(args.input)
        result = project(inputs, current_year=args.current_year)
    except (OSError, json.JSONDecodeError, ConfigError, TypeError) as e:
        print(f"Error reading inputs: {e}", file=sys.stderr)
        return 1

    if result.has_errors():
        for error in result.validation_errors:
            print(f"❌ {error}", file=sys.stderr)
        return 1

    _emit(asdict(result), args.output)
    return 0


def cmd_simulate(args) -> int:
    """Run a Monte Carlo batch."""
    try:
        inputs, mc_inputs = _read_config(args.input)
        if args.trials is not None:
            mc_inputs = MonteCarloInputs(
                **{**mc_inputs.to_dict(), "num_simulations": args.trials}
            )
        run = simulate_with_logs if args.logs else simulate
        result = run(inputs, mc_inputs, seed=args.seed, current_year=args.current_year)
    except (OSError, json.JSONDecodeError, ConfigError, TypeError) as e:
        print(f"Simulation failed: {e}", file=sys.stderr)
        return 1

    data = asdict(result) if args.logs else result.summary()
    if not args.logs and args.runs:
        data["simulations"] = [asdict(r) for r in result.simulations]
    _emit(data, args.output)
    return 0


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="firelab", description="FireLab - FIRE projection and Monte Carlo engine"
    )
    parser.add_argument("--version", action="version", version=f"FireLab {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(
        dest="cmd", required=True, help="Available commands"
    )

    # Example command
    example_parser = subparsers.add_parser(
        "example", help="Print an input JSON document with default values"
    )
    example_parser.set_defaults(func=cmd_example)

    def add_common(p, with_output: bool = True):
        p.add_argument("-i", "--input", required=True, help="Input JSON file")
        if with_output:
            p.add_argument("-o", "--output", help="Output JSON file (default: stdout)")
        p.add_argument(
            "--current-year",
            type=int,
            default=None,
            help="Calendar year of the first projected year (default: this year)",
        )

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate an input JSON")
    add_common(validate_parser, with_output=False)
    validate_parser.add_argument(
        "--format", choices=["human", "json"], default="human", help="Output format"
    )
    validate_parser.set_defaults(func=cmd_validate)

    # Project command
    project_parser = subparsers.add_parser(
        "project", help="Run the deterministic projection"
    )
    add_common(project_parser)
    project_parser.set_defaults(func=cmd_project)

    # Simulate command
    simulate_parser = subparsers.add_parser(
        "simulate", help="Run a Monte Carlo simulation batch"
    )
    add_common(simulate_parser)
    simulate_parser.add_argument(
        "--trials", type=int, help="Override the number of simulations"
    )
    simulate_parser.add_argument("--seed", type=int, help="Random seed")
    simulate_parser.add_argument(
        "--runs", action="store_true", help="Include every trial outcome in the output"
    )
    simulate_parser.add_argument(
        "--logs", action="store_true", help="Include year-by-year logs of every trial"
    )
    simulate_parser.set_defaults(func=cmd_simulate)

    # Parse arguments and execute
    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
