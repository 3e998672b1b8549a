"""Bank registry record."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from nuban.core.digits import is_ascii_digits

# Alternative spellings seen in published bank lists (Paystack uses "longcode").
_FIELD_ALIASES = {
    "longcode": "long_code",
    "long-code": "long_code",
    "bank_code": "code",
    "bank_name": "name",
}


class Bank(BaseModel):
    """A bank as published in the registry.

    ``code`` is a 3-digit deposit money bank (DMB) code or a 5-digit other
    financial institution (OFI) code. Two records are the same bank when
    their codes match case-insensitively.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(default="", description="Bank display name")
    code: str = Field(..., description="CBN bank code (3-digit DMB or 5-digit OFI)")
    long_code: str = Field(default="", description="Branch sort code, unused by prediction")

    @model_validator(mode="before")
    @classmethod
    def _case_insensitive_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        normalized: dict[str, Any] = {}
        for key, value in data.items():
            lowered = str(key).strip().lower()
            normalized[_FIELD_ALIASES.get(lowered, lowered)] = value
        return normalized

    @field_validator("name", "code", "long_code", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @property
    def is_dmb(self) -> bool:
        return len(self.code) == 3 and is_ascii_digits(self.code)

    @property
    def is_ofi(self) -> bool:
        return len(self.code) == 5 and is_ascii_digits(self.code)

    def same_bank(self, other: "Bank") -> bool:
        return self.code.casefold() == other.code.casefold()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bank):
            return NotImplemented
        return self.same_bank(other)

    def __hash__(self) -> int:
        return hash(self.code.casefold())
