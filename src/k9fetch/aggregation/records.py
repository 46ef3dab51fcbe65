"""Parse-and-validate step for training session records.

Session blobs arrive as free-form JSON. Everything that reads a result,
a condition or a scent label goes through this module so that coercion
rules live in one place.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

from k9fetch.models.domain import CONDITION_KEYS, ConditionKey, TrainingSessionEntity

SUCCESS_TOKEN = "success"
UNKNOWN_SCENT = "unknown"

# Leading decimal number, as typed by trainers ("22", "-3.5", "22°C", "1e3 hPa")
_LEADING_NUMBER = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


@dataclass(frozen=True)
class SessionConditions:
    """Validated environmental conditions for one session.

    Each field is a finite float, or None when absent or malformed.
    """

    temp: float | None = None
    wind: float | None = None
    press: float | None = None
    hum: float | None = None

    def get(self, key: ConditionKey) -> float | None:
        return getattr(self, key)


def is_success_result(result: Any) -> bool:
    """Return True when a result field marks a hit.

    Case-insensitive equality with "success". No trimming: "success "
    is a failure, as is None or an empty string.
    """
    if result is None:
        return False
    return str(result).lower() == SUCCESS_TOKEN


def parse_condition_value(raw: Any) -> float | None:
    """Coerce one raw condition entry to a finite float.

    Numbers pass through. Text yields its leading number, so a reading
    with a unit ("22°C", "15 km/h") keeps its value. Booleans, other
    types, text without a leading number and non-finite values are
    absent.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        match = _LEADING_NUMBER.match(raw)
        if match is None:
            return None
        value = float(match.group(0))
    else:
        return None

    return value if math.isfinite(value) else None


def get_condition_value(session: TrainingSessionEntity, key: ConditionKey) -> float | None:
    """Read one condition from a session, or None when absent."""
    conditions = session.conditions if isinstance(session.conditions, dict) else {}
    return parse_condition_value(conditions.get(key))


def parse_conditions(session: TrainingSessionEntity) -> SessionConditions:
    """Build the validated condition record for a session."""
    return SessionConditions(**{key: get_condition_value(session, key) for key in CONDITION_KEYS})


def get_scent_label(session: TrainingSessionEntity) -> str:
    """Scent category of a session, "unknown" when missing."""
    type_blob = session.type if isinstance(session.type, dict) else {}
    scent = type_blob.get("scent")
    if scent is None or scent == "":
        return UNKNOWN_SCENT
    return str(scent)


def split_cohorts(
    sessions: list[TrainingSessionEntity],
) -> tuple[list[TrainingSessionEntity], list[TrainingSessionEntity]]:
    """Partition sessions into (success, failure) cohorts, order preserved."""
    success: list[TrainingSessionEntity] = []
    fail: list[TrainingSessionEntity] = []
    for session in sessions:
        if is_success_result(session.result):
            success.append(session)
        else:
            fail.append(session)
    return success, fail
