from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")

class ErrorKind(str, Enum):
    FETCH_FAILED = "fetch_failed"                      # transaction store unreachable or errored
    NOT_ENOUGH_DATA = "not_enough_data"                # zero usable history
    DATA_AGGREGATION_ERROR = "data_aggregation_error"  # aggregation could not proceed
    MODEL_ERROR = "model_error"                        # prediction path failed, see message
    EXPORT_FAILED = "export_failed"                    # CSV export could not be written

@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str = ""

    @property
    def ok(self) -> bool:
        return False

    def describe(self) -> str:
        return f"{self.kind.value}: {self.message}" if self.message else self.kind.value

Result = Union[Success[T], Failure]

class TransactionFetchError(Exception):
    """Raised by a transaction source when it cannot deliver transactions."""
