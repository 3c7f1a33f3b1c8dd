from dataclasses import dataclass


@dataclass(frozen=True)
class EligibilityError:
    message: str


@dataclass(frozen=True)
class MissingColumn(EligibilityError):
    column: str

    @classmethod
    def named(cls, column: str) -> "MissingColumn":
        return cls(message=f"Missing column: {column}", column=column)


@dataclass(frozen=True)
class MalformedInput(EligibilityError):
    detail: str

    @classmethod
    def from_decoder(cls, detail: str) -> "MalformedInput":
        return cls(message=f"Malformed CSV: {detail}", detail=detail)


@dataclass(frozen=True)
class StoreError(EligibilityError):
    path: str
