from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

NO_MAPPING = "no_mapping"
PARSE_ERROR = "parse_error"


@dataclass
class Result(Generic[T]):
    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @staticmethod
    def success(value: T) -> "Result[T]":
        return Result(ok=True, value=value)

    @staticmethod
    def failure(error: str, code: str = "unknown") -> "Result[T]":
        return Result(ok=False, error=error, error_code=code)
