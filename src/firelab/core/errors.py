"""
Error classes for FireLab.

This module defines the exception raised when a calculation cannot start
because its inputs are structurally invalid.
"""


class ConfigError(ValueError):
    """
    Configuration error raised before a calculation starts.

    The deterministic projection never raises for bad inputs: it reports them
    as a list of messages inside its result. The Monte Carlo engine, input
    parsing and the CLI raise this exception instead, since running thousands
    of trials against invalid inputs is pointless.

    **Common Causes:**
    - Asset allocation not summing to 100%
    - Withdrawal rate of zero or below when running simulations
    - Monte Carlo parameters outside their bounds
    - Unknown keys when building inputs from a dictionary

    **Example Usage:**
        ```python
        from firelab import FinancialInputs, MonteCarloInputs, simulate
        from firelab.core.errors import ConfigError

        inputs = FinancialInputs(cash_percent=5)  # 70 + 20 + 5 != 100
        try:
            simulate(inputs, MonteCarloInputs())
        except ConfigError as e:
            print(f"Configuration error: {e}")
        ```
    """

    pass
