from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any, Optional


REGISTRATION_PATTERN = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z]{3}$")


def is_valid_registration(value: Any) -> bool:
    return isinstance(value, str) and REGISTRATION_PATTERN.fullmatch(value) is not None


@dataclass(frozen=True)
class LookupSummary:
    make: Optional[str]
    model: Optional[str]
    colour: Optional[str]
    mot_expiry_date: Optional[str]
    mileage: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
