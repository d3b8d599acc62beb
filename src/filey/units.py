"""Units of information and human-readable sizes."""

from __future__ import annotations

from enum import Enum
from typing import Final

KIB: Final[int] = 2**10
MIB: Final[int] = 2**20
GIB: Final[int] = 2**30
TIB: Final[int] = 2**40
PIB: Final[int] = 2**50
EIB: Final[int] = 2**60

KB: Final[int] = 10**3
MB: Final[int] = 10**6
GB: Final[int] = 10**9
TB: Final[int] = 10**12
PB: Final[int] = 10**15
EB: Final[int] = 10**18


class UnitOfInfo(Enum):
    """Binary units of information, valued in bytes."""

    KiB = KIB
    MiB = MIB
    GiB = GIB
    TiB = TIB
    PiB = PIB
    EiB = EIB

    def __str__(self) -> str:
        return self.name

    def __int__(self) -> int:
        return self.value

    @staticmethod
    def convert(n: int, unit: "UnitOfInfo") -> float:
        """Express ``n`` bytes in ``unit``.

        >>> UnitOfInfo.convert(GIB, UnitOfInfo.MiB)
        1024.0
        """
        return n / unit.value

    @staticmethod
    def format(n: int) -> str:
        """Format ``n`` bytes with the largest unit that does not exceed it.

        >>> UnitOfInfo.format(1024)
        '1KiB'
        >>> UnitOfInfo.format(1536)
        '1.5KiB'
        >>> UnitOfInfo.format(512)
        '512B'
        """
        if n < 0:
            raise ValueError(f"size cannot be negative: {n}")
        units = list(UnitOfInfo)
        fitting = [index for index, unit in enumerate(units) if n >= unit.value]
        if not fitting:
            return f"{n}B"
        index = fitting[-1]
        amount = round(n / units[index].value, 1)
        # 1023.96KiB rounds to 1024.0; show it as 1MiB instead.
        if amount >= 1024 and index + 1 < len(units):
            index += 1
            amount = round(n / units[index].value, 1)
        return f"{amount:.1f}".removesuffix(".0") + units[index].name


__all__ = [
    "EB",
    "EIB",
    "GB",
    "GIB",
    "KB",
    "KIB",
    "MB",
    "MIB",
    "PB",
    "PIB",
    "TB",
    "TIB",
    "UnitOfInfo",
]
