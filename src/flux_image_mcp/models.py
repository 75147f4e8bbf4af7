"""Pydantic models for tool arguments and cached generations."""

import math
import re
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    ValidationError,
    field_validator,
)

# --- Allowed Values ---

ASPECT_RATIOS = (
    "21:9",
    "16:9",
    "3:2",
    "4:3",
    "5:4",
    "1:1",
    "4:5",
    "3:4",
    "2:3",
    "9:16",
    "9:21",
)

OUTPUT_FORMATS = ("jpg", "png")

RESPONSE_FORMATS = ("url", "b64_json")


# --- Type Aliases ---

AspectRatioLiteral = Literal[
    "21:9", "16:9", "3:2", "4:3", "5:4", "1:1", "4:5", "3:4", "2:3", "9:16", "9:21"
]

OutputFormat = Literal["jpg", "png"]

ResponseFormat = Literal["url", "b64_json"]


# --- Numeric Parsing ---


_DECIMAL_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


def _parse_number(value: Any) -> float:
    """Parse a JSON number or a plain decimal string.

    Booleans, NaN, and strings such as "", "1_000", "inf" or "0x10" are
    rejected. Integers too large for a float become +/-inf.
    """
    if isinstance(value, bool):
        raise ValueError("expected a number, got a boolean")
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        if not _DECIMAL_PATTERN.match(value.strip()):
            raise ValueError(f"{value!r} is not a number")
        number = float(value)
    else:
        raise ValueError(f"expected a number, got {type(value).__name__}")
    if math.isnan(number):
        raise ValueError("NaN is not a number")
    return number


def _parse_integer(value: Any) -> int:
    """Parse an integer, a whole-valued float, or a numeric string."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _INTEGER_PATTERN.match(value.strip()):
        try:
            return int(value)
        except ValueError:
            pass
    number = _parse_number(value)
    if math.isinf(number) or not number.is_integer():
        raise ValueError(f"{value!r} is not an integer")
    return int(number)


# --- Generation Models ---


class GenerationRequest(BaseModel):
    """Validated arguments for the generate_image tool."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    prompt: StrictStr
    image_prompt: StrictStr | None = None
    image_prompt_strength: float | None = Field(default=None, ge=0, le=1)
    aspect_ratio: AspectRatioLiteral | None = None
    safety_tolerance: int | None = Field(default=None, ge=1, le=6)
    seed: int | None = None
    output_format: OutputFormat | None = None
    raw: StrictBool | None = None
    response_format: ResponseFormat | None = None

    @field_validator("prompt")
    @classmethod
    def _prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must not be empty")
        return value

    @field_validator("image_prompt_strength", mode="before")
    @classmethod
    def _coerce_strength(cls, value: Any) -> float | None:
        return None if value is None else _parse_number(value)

    @field_validator("safety_tolerance", "seed", mode="before")
    @classmethod
    def _coerce_integer(cls, value: Any) -> int | None:
        return None if value is None else _parse_integer(value)


class InvalidArguments(BaseModel):
    """Rejection produced when tool arguments fail validation."""

    message: str
    invalid_fields: list[str] = []

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> "InvalidArguments":
        fields = []
        problems = []
        for detail in error.errors():
            field = ".".join(str(part) for part in detail["loc"]) or "arguments"
            if field not in fields:
                fields.append(field)
            problems.append(f"{field}: {detail['msg']}")
        return cls(
            message="Invalid image generation arguments: " + "; ".join(problems),
            invalid_fields=fields,
        )


def parse_generation_args(raw: Any) -> GenerationRequest | InvalidArguments:
    """Validate raw tool arguments.

    Args:
        raw: Arguments as received from the host

    Returns:
        A GenerationRequest when every rule holds, otherwise InvalidArguments
    """
    if not isinstance(raw, dict):
        return InvalidArguments(
            message="Invalid image generation arguments: expected an object",
            invalid_fields=["arguments"],
        )
    try:
        return GenerationRequest.model_validate(raw)
    except ValidationError as e:
        return InvalidArguments.from_validation_error(e)


class GenerationRecord(BaseModel):
    """A completed generation kept in the recent-generations cache."""

    model_config = ConfigDict(frozen=True)

    prompt: str
    response: Any
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
