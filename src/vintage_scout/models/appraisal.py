from dataclasses import dataclass, field
from typing import Any

from ..exceptions import MalformedAppraisalResponse


def _number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _string_list(data: dict, key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedAppraisalResponse(f"'{key}' must be a list")
    return [str(v) for v in value]


@dataclass
class Appraisal:
    """Normalized vision-model appraisal of one listing.

    ``estimated_value`` is None when the model could not put a value on the
    item (typically not vintage); ``margin`` is None exactly when
    ``estimated_value`` is.
    """
    is_authentic: bool
    estimated_era: str
    estimated_value: float | None
    current_price: float
    margin: float | None
    confidence: float
    reasoning: str = ""
    red_flags: list[str] = field(default_factory=list)
    references: list[str] = field(default_factory=list)

    def __post_init__(self):
        if (self.margin is None) != (self.estimated_value is None):
            raise ValueError("margin must be set if and only if estimated_value is set")

    @classmethod
    def from_dict(cls, data: dict, listed_price: float | None = None) -> "Appraisal":
        """Parse the model's JSON object (camelCase wire shape).

        The margin is recomputed from the estimated value and current price
        rather than trusted from the model.
        """
        if not isinstance(data, dict):
            raise MalformedAppraisalResponse("appraisal is not a JSON object")

        is_authentic = data.get("isAuthentic")
        if not isinstance(is_authentic, bool):
            raise MalformedAppraisalResponse("'isAuthentic' must be a boolean")

        confidence = data.get("confidence")
        if not _number(confidence):
            raise MalformedAppraisalResponse("'confidence' must be a number")
        confidence = min(max(float(confidence), 0.0), 1.0)

        estimated_value = data.get("estimatedValue")
        if estimated_value is not None and not _number(estimated_value):
            raise MalformedAppraisalResponse("'estimatedValue' must be a number or null")

        current_price = data.get("currentPrice")
        if current_price is None:
            current_price = listed_price
        if not _number(current_price):
            raise MalformedAppraisalResponse("'currentPrice' must be a number")

        margin = None
        if estimated_value is not None:
            estimated_value = float(estimated_value)
            margin = round(estimated_value - float(current_price), 2)

        return cls(
            is_authentic=is_authentic,
            estimated_era=str(data.get("estimatedEra") or "Unknown"),
            estimated_value=estimated_value,
            current_price=float(current_price),
            margin=margin,
            confidence=confidence,
            reasoning=str(data.get("reasoning") or ""),
            red_flags=_string_list(data, "redFlags"),
            references=_string_list(data, "references"),
        )

