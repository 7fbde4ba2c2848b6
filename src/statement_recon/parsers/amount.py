"""
Monetary value normalization.
Turns loosely formatted amount strings into floats.
"""

from typing import Optional
import math
import re

from ..config import AmountsConfig

# Longest leading float literal; anything after it is ignored
LEADING_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
WHITESPACE_PATTERN = re.compile(r"\s+")


class AmountNormalizer:
    """
    Normalizes raw amount strings such as ``"1.234,56 EUR"`` into floats.

    Under the default ``comma`` convention a string holding both separators
    is read as ``thousands.group,decimal``; a lone comma is the decimal mark.
    The ``period`` convention treats every comma as a grouping mark instead.
    """

    def __init__(self, config: Optional[AmountsConfig] = None):
        """
        Initialize the normalizer.

        Args:
            config: Amount settings; defaults are used when omitted
        """
        self.config = config or AmountsConfig()
        self._marker_patterns = [
            re.compile(rf"\s*{re.escape(marker)}\s*")
            for marker in self.config.currency_markers
            if marker
        ]

    def normalize(self, raw: Optional[str]) -> Optional[float]:
        """
        Normalize a raw amount string.

        Args:
            raw: Amount text as found in an export, a cell or typed input

        Returns:
            The signed amount, or None when no finite number can be read
        """
        if raw is None:
            return None

        clean = raw.strip()
        if not clean:
            return None

        for pattern in self._marker_patterns:
            clean = pattern.sub("", clean)
        clean = WHITESPACE_PATTERN.sub("", clean)

        clean = self._resolve_separators(clean)

        match = LEADING_NUMBER_PATTERN.match(clean)
        if not match:
            return None

        value = float(match.group(0))
        if not math.isfinite(value):
            return None
        return value

    def _resolve_separators(self, clean: str) -> str:
        """Rewrite grouping and decimal marks into a plain float literal."""
        if self.config.decimal_convention == "period":
            return clean.replace(",", "")

        if "," in clean and "." in clean:
            return clean.replace(".", "").replace(",", ".", 1)
        if "," in clean:
            return clean.replace(",", ".", 1)
        return clean


_default_normalizer = AmountNormalizer()


def normalize_amount(raw: Optional[str]) -> Optional[float]:
    """Normalize ``raw`` with the default comma-decimal settings."""
    return _default_normalizer.normalize(raw)


def format_amount(value: float) -> str:
    """Render an amount with exactly two decimals."""
    return f"{value:.2f}"
