"""Display enums shared by services: localized labels and sort order.

A display enum is an ``Enum`` whose members are listed to API clients, for
example to fill a dropdown. Each member has a ``message_key`` for its
localized label and an optional ``order_seq``. Services define their own the
same way as ``CountryCode``::

    class VacationType(DisplayTypeMixin, Enum):
        ANNUAL = 1
        SICK = 2

        @property
        def message_key(self) -> str:
            return f"type.vacation.{self.code_lower}"

        @property
        def order_seq(self) -> int | None:
            return self.value

Because a display member has ``code`` and ``message_key``,
``MessageResolver.resolve`` accepts it directly and falls back to the code.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Union, runtime_checkable

UNORDERED_SEQ = sys.maxsize


@runtime_checkable
class DisplayType(Protocol):
    """Anything that can be shown to clients as a labelled choice."""

    @property
    def code(self) -> str: ...

    @property
    def message_key(self) -> str: ...

    @property
    def order_seq(self) -> Optional[int]: ...


class DisplayTypeMixin:
    """Give an ``Enum`` the ``DisplayType`` shape.

    Subclasses provide ``message_key`` and ``order_seq``; everything else is
    derived from the member name and position.
    """

    @property
    def message_key(self) -> str:
        raise NotImplementedError

    @property
    def order_seq(self) -> Optional[int]:
        raise NotImplementedError

    @property
    def code(self) -> str:
        if isinstance(self, Enum):
            return self.name
        return str(self)

    @property
    def code_lower(self) -> str:
        return self.code.lower()

    @property
    def code_upper(self) -> str:
        return self.code.upper()

    @property
    def ordinal(self) -> int:
        if isinstance(self, Enum):
            return list(type(self)).index(self)
        return 0

    @property
    def has_order_seq(self) -> bool:
        return self.order_seq is not None

    @property
    def order_seq_int(self) -> int:
        """Sort key; members without ``order_seq`` sort last."""
        seq = self.order_seq
        return seq if seq is not None else UNORDERED_SEQ


class CountryCode(DisplayTypeMixin, Enum):
    """ISO 3166-1 countries served by porest services.

    The member name is the alpha-2 code; values are
    ``(alpha3, numeric, continent, korean_name)``.
    """

    KR = ("KOR", "410", "Asia", "대한민국")
    US = ("USA", "840", "America", "미국")
    JP = ("JPN", "392", "Asia", "일본")
    CN = ("CHN", "156", "Asia", "중국")
    VN = ("VNM", "704", "Asia", "베트남")
    MY = ("MYS", "458", "Asia", "말레이시아")
    PL = ("POL", "616", "Europe", "폴란드")

    def __init__(self, alpha3: str, numeric: str, continent: str, korean_name: str) -> None:
        self.alpha3 = alpha3
        self.numeric = numeric
        self.continent = continent
        self.korean_name = korean_name

    @property
    def message_key(self) -> str:
        return f"type.country.code.{self.code_lower}"

    @property
    def order_seq(self) -> int:
        return self.ordinal

    @property
    def alpha2(self) -> str:
        return self.name

    def is_asia(self) -> bool:
        return self.continent == "Asia"

    def is_america(self) -> bool:
        return self.continent == "America"

    def is_europe(self) -> bool:
        return self.continent == "Europe"

    @classmethod
    def from_code(
        cls, code: Optional[str], default: Optional["CountryCode"] = None
    ) -> Optional["CountryCode"]:
        """Look up a country by alpha-2, alpha-3 or numeric code.

        Matching ignores case and surrounding whitespace. Returns ``default``
        for blank or unknown codes.
        """
        if code is None or not code.strip():
            return default
        return _COUNTRY_LOOKUP.get(code.strip().upper(), default)

    @classmethod
    def exists(cls, code: Optional[str]) -> bool:
        return cls.from_code(code) is not None

    @classmethod
    def by_continent(cls, continent: str) -> list["CountryCode"]:
        """Countries on ``continent`` (case-insensitive), in declaration order."""
        wanted = continent.lower()
        return [country for country in cls if country.continent.lower() == wanted]

    @classmethod
    def asian_countries(cls) -> list["CountryCode"]:
        return cls.by_continent("Asia")

    @classmethod
    def american_countries(cls) -> list["CountryCode"]:
        return cls.by_continent("America")

    @classmethod
    def european_countries(cls) -> list["CountryCode"]:
        return cls.by_continent("Europe")


_COUNTRY_LOOKUP: Dict[str, CountryCode] = {}
for _country in CountryCode:
    for _key in (_country.alpha2, _country.alpha3, _country.numeric):
        _COUNTRY_LOOKUP.setdefault(_key, _country)
del _country, _key


_YES_TOKENS = frozenset({"Y", "YES", "TRUE", "1", "T", "ON"})
_NO_TOKENS = frozenset({"N", "NO", "FALSE", "0", "F", "OFF"})


class YNType(str, Enum):
    """``Y``/``N`` flag as stored in legacy columns and query parameters."""

    Y = "Y"
    N = "N"

    @property
    def description(self) -> str:
        return "예" if self is YNType.Y else "아니오"

    def to_boolean(self) -> bool:
        return self is YNType.Y

    def opposite(self) -> "YNType":
        return YNType.N if self is YNType.Y else YNType.Y

    @classmethod
    def when(cls, condition: bool) -> "YNType":
        return cls.Y if condition else cls.N

    @classmethod
    def parse(
        cls, value: Union[str, bool, None], default: Optional["YNType"] = None
    ) -> "YNType":
        """Convert loose input to a flag.

        Accepts booleans and, ignoring case, ``Y/YES/TRUE/1/T/ON`` and
        ``N/NO/FALSE/0/F/OFF``. ``None``, blank and unknown strings give
        ``default``, which is ``N`` when omitted.
        """
        fallback = cls.N if default is None else default
        if isinstance(value, bool):
            return cls.when(value)
        if value is None or not value.strip():
            return fallback
        token = value.strip().upper()
        if token in _YES_TOKENS:
            return cls.Y
        if token in _NO_TOKENS:
            return cls.N
        return fallback


def yn_to_bool(value: Optional[YNType], default: bool = False) -> bool:
    """Null-safe ``YNType.to_boolean``; ``None`` gives ``default``."""
    if value is None:
        return default
    return value.to_boolean()


def is_yes(value: Any) -> bool:
    """True only for ``YNType.Y``; ``None`` and ``N`` are not yes."""
    return value is YNType.Y


__all__ = [
    "CountryCode",
    "DisplayType",
    "DisplayTypeMixin",
    "UNORDERED_SEQ",
    "YNType",
    "is_yes",
    "yn_to_bool",
]
