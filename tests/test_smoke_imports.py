"""
Smoke tests to verify basic imports and functionality.
"""


def test_import_firelab():
    """Test that we can import the main package."""
    import firelab

    assert hasattr(firelab, "__version__")
    assert firelab.__version__ == "0.1.0"


def test_import_core_components():
    """Test that core components can be imported."""
    from firelab import (
        CalculationResult,
        ConfigError,
        FinancialInputs,
        MonteCarloInputs,
        MonteCarloResult,
        ReturnGenerator,
        project,
        simulate,
        simulate_with_logs,
        validate_inputs,
    )

    assert issubclass(ConfigError, ValueError)
    assert callable(project)
    assert callable(simulate)
    assert callable(simulate_with_logs)
    assert callable(validate_inputs)
    assert FinancialInputs().allocation_is_valid()
    assert MonteCarloInputs().num_simulations == 1000
    assert CalculationResult().years_to_fire == -1
    assert MonteCarloResult.from_runs([]).success_rate == 0.0
    assert ReturnGenerator(seed=1).rng is not None


def test_public_api_is_exported():
    import firelab

    for name in firelab.__all__:
        assert hasattr(firelab, name), name


def test_default_projection_runs():
    """A default projection for a fixed year completes without errors."""
    from firelab import FinancialInputs, project

    result = project(FinancialInputs(), current_year=2025)

    assert not result.has_errors()
    assert len(result.projections) == 100 - 35 + 1
