"""
JSON Schema Contract Validators

Validation of the JSON documents batchcalc reads and writes, using the
jsonschema library (Draft 2020-12).

Schemas (batchcalc/contracts/schema/):
- calculator_config.json: configuration file accepted by --config
- batch_report.json: report written by --report
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    JSON Schema file loader.

    Schemas live in the `schema` directory next to this module.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Loaded schemas by name
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'batch_report')

        Returns:
            Loaded schema as dict

        Raises:
            FileNotFoundError: if the schema file does not exist
            json.JSONDecodeError: if the file is not valid JSON
            ValueError: if the file is not a valid JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Validates data against one named JSON Schema."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: if data does not match the schema
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class CalculatorConfigValidator(ContractValidator):
    """
    Validator for the calculator_config contract.

    Guards the --config file before it reaches CalculatorConfig. Unknown
    keys and out-of-range numeric settings are rejected here.
    """

    def __init__(self):
        super().__init__("calculator_config")


class BatchReportValidator(ContractValidator):
    """
    Validator for the batch_report contract.

    Guards the --report output: 1-based line numbers and exactly one of
    result or error per line.
    """

    def __init__(self):
        super().__init__("batch_report")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_calculator_config(data: Dict[str, Any]) -> None:
    """
    Validate configuration file contents.

    Raises:
        ValidationError: if data does not match the schema
    """
    CalculatorConfigValidator().validate(data)


def validate_batch_report(data: Dict[str, Any]) -> None:
    """
    Validate a batch report document.

    Raises:
        ValidationError: if data does not match the schema
    """
    BatchReportValidator().validate(data)
