"""Rupiah formatting shared by chart and comparison responses."""

from typing import Union


def format_rupiah(amount: Union[int, float, None]) -> str:
    """
    Format an amount the way the id-ID locale shows IDR, without decimals.

    >>> format_rupiah(8000000)
    'Rp 8.000.000'
    """
    value = int(round(amount or 0))
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,}".replace(",", ".")
    return f"{sign}Rp {grouped}"
