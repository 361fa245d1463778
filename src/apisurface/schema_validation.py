"""
Schema validation for API JSON reports.

The schema file ships inside the package and is addressed relative to this
module. A report that fails validation was produced by our own generator, so
a failure is a generator bug rather than bad input.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "api-json.schema.json"


class SchemaConformanceError(Exception):
    """Raised when a generated report does not conform to the API JSON schema."""

    def __init__(self, filename: str, details: str):
        self.filename = filename
        self.details = details
        super().__init__(
            f"{filename} does not conform to the expected schema -- "
            f"please report this generator bug:\n{details}"
        )


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one document."""

    errors: Tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def details(self) -> str:
        """Diagnostic for the first (most relevant) violation, empty when valid."""
        return self.errors[0] if self.errors else ""


def load_schema(path: Path = SCHEMA_PATH) -> Draft7Validator:
    """Read the schema file and compile a validator for it."""
    with open(path, encoding="utf-8") as fh:
        schema = json.load(fh)
    Draft7Validator.check_schema(schema)
    return Draft7Validator(schema)


def _describe(error) -> str:
    location = "/".join(str(part) for part in error.absolute_path) or "(root)"
    return f"{location}: {error.message}"


def validate_document(document: Dict[str, Any], validator: Draft7Validator) -> ValidationResult:
    """
    Validate a document and collect every violation.

    The most relevant violation (per jsonschema's best_match heuristic) is
    listed first.
    """
    violations = sorted(validator.iter_errors(document), key=lambda e: [str(part) for part in e.absolute_path])
    if not violations:
        return ValidationResult()

    # best_match may descend into a oneOf context; leave out the errors it came from
    first = best_match(violations)
    lineage = set()
    error = first
    while error is not None:
        lineage.add(id(error))
        error = error.parent
    rest = [_describe(e) for e in violations if id(e) not in lineage]
    return ValidationResult(errors=tuple([_describe(first)] + rest))
