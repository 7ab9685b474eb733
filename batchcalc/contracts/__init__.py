"""
Contract Validation Module

JSON Schema validation for the configuration file and the batch report.
"""

from .validators import (
    BatchReportValidator,
    CalculatorConfigValidator,
    ContractValidator,
    SchemaLoader,
    validate_batch_report,
    validate_calculator_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CalculatorConfigValidator",
    "BatchReportValidator",
    # Functions
    "validate_calculator_config",
    "validate_batch_report",
]
