"""Ok/Err values returned across the parse, load and store boundary.

Callers branch with ``isinstance(result, Err)`` or a ``match`` statement;
nothing in the core raises for bad input data.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from club_eligibility.domain.errors import EligibilityError

T = TypeVar("T")
E = TypeVar("E", bound=EligibilityError)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    @property
    def message(self) -> str:
        return self.error.message


Result = Ok[T] | Err[E]
