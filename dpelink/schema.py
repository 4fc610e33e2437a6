import re
from enum import Enum
from typing import Any, Dict, List


class EnergyClass(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"


ENERGY_CLASSES = tuple(c.value for c in EnergyClass)
ZIP_CODE_RE = re.compile(r"^\d{5}$")

REQUIRED_FIELDS = ["zip_code", "energy_class", "square_footage"]
OPTIONAL_STR_FIELDS = ["address", "city"]

DIAGNOSTIC_REQUIRED_FIELDS = ["external_id", "zip_code", "energy_class"]
DIAGNOSTIC_OPTIONAL_STR_FIELDS = ["id", "address"]


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _check_zip_code(data: Dict[str, Any], errors: List[str]) -> None:
    zip_code = data.get("zip_code")
    if zip_code is not None:
        if not isinstance(zip_code, str) or not ZIP_CODE_RE.match(zip_code):
            errors.append("Field 'zip_code' must be a 5-digit string")


def _check_energy_class(data: Dict[str, Any], errors: List[str]) -> None:
    energy_class = data.get("energy_class")
    if energy_class is not None:
        if not isinstance(energy_class, str) or energy_class.upper() not in ENERGY_CLASSES:
            errors.append("Field 'energy_class' must be one of A-G")


def validate_query(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    errors: List[str] = []

    for f in REQUIRED_FIELDS:
        if data.get(f) is None:
            errors.append(f"Missing required field: {f}")

    _check_zip_code(data, errors)
    _check_energy_class(data, errors)

    square_footage = data.get("square_footage")
    if square_footage is not None:
        if not _is_number(square_footage) or square_footage <= 0:
            errors.append("Field 'square_footage' must be a positive number")

    for f in OPTIONAL_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    return errors


def validate_diagnostic(record: Any) -> List[str]:
    """
    Validate one registry record read from an import file.

    Square footage may be missing, but when present it must be a positive number.
    """
    if not isinstance(record, dict):
        return ["Record must be a JSON object"]

    errors: List[str] = []

    for f in DIAGNOSTIC_REQUIRED_FIELDS:
        if not record.get(f):
            errors.append(f"Missing required field: {f}")

    if record.get("external_id") and not isinstance(record["external_id"], str):
        errors.append("Field 'external_id' must be a string")

    _check_zip_code(record, errors)
    _check_energy_class(record, errors)

    square_footage = record.get("square_footage")
    if square_footage is not None:
        if not _is_number(square_footage) or square_footage <= 0:
            errors.append("Field 'square_footage' must be a positive number if provided")

    for f in DIAGNOSTIC_OPTIONAL_STR_FIELDS:
        if record.get(f) is not None and not isinstance(record[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    return errors
