"""
markup/element.py

Common contract for every parseable markup element.

An element is built from a regex match: ``initialize`` stores the matched
text as ``data`` and hands the match to ``_get_attributes``, which pulls
typed fields out of the named groups.  ``validate`` computes the element's
validation count, the number of non-whitespace characters of the markup
the element explains.  The count drives brush disambiguation and the
strict-mode coverage check.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional, Type, TypeVar

from markup.grammar import get_registry
from models import ParseOutcome, lookup_enum

log = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class MarkupElement(ABC):
    """Abstract base class for markup elements.

    Attributes:
        data: The markup text this element consumed ("" when empty).
        outcomes: Per-field parse outcome for fields present in the markup.
    """

    def __init__(self):
        self.data: str = ""
        self.success: bool = False
        self.outcomes: Dict[str, ParseOutcome] = {}
        # Markup tokens whose values were rejected; they do not count
        # towards the validation count.
        self._rejected: List[str] = []

    # ── contract ──────────────────────────────────────────

    def initialize(self, match: Optional[re.Match]) -> None:
        """Populate the element from *match*.

        An unsuccessful match leaves the element empty (``success`` is
        False).  Whether an empty element is acceptable is the caller's
        decision.
        """
        if match is None:
            return
        self.data = match.group(0)
        self.success = True
        self._get_attributes(match)

    @abstractmethod
    def _get_attributes(self, match: re.Match) -> None:
        """Extract the element's typed fields from the match groups."""

    def validate(self) -> int:
        """Compute the validation count.

        Leaf elements count the non-whitespace characters of ``data``,
        less the characters of any rejected tokens.
        """
        if not self.success:
            return 0
        registry = get_registry()
        rejected = sum(registry.meaningful_count(token) for token in self._rejected)
        return max(0, registry.meaningful_count(self.data) - rejected)

    @property
    def validation_count(self) -> int:
        return self.validate()

    # ── field helpers ─────────────────────────────────────

    def _parsed(self, name: str) -> None:
        self.outcomes[name] = ParseOutcome.PARSED

    def _defaulted(self, name: str, token: str, default) -> None:
        """Record that *name* fell back to *default* because *token* was malformed."""
        self.outcomes[name] = ParseOutcome.USED_DEFAULT
        self._rejected.append(token)
        log.debug("%s: %s=%r not recognised, using %r", type(self).__name__, name, token, default)

    def _parse_float(self, name: str, text: Optional[str], default: float,
                     token: Optional[str] = None, absolute: bool = False) -> float:
        """Parse *text* as a float, falling back to *default*.

        Args:
            name: Field name for outcome bookkeeping.
            text: The captured value text.
            default: Value used when *text* is unparsable.
            token: Full markup token to reject on failure (defaults to *text*).
            absolute: Sanitize by taking the absolute value.
        """
        if get_registry().is_float(text):
            value = float(text)
            self._parsed(name)
            return abs(value) if absolute else value
        self._defaulted(name, token if token is not None else (text or ""), default)
        return default

    def _parse_enum(self, name: str, enum_cls: Type[E], text: Optional[str], default: E,
                    token: Optional[str] = None) -> E:
        """Tolerant enum lookup: unknown tokens resolve to *default*."""
        member = lookup_enum(enum_cls, text or "")
        if member is not None:
            self._parsed(name)
            return member
        self._defaulted(name, token if token is not None else (text or ""), default)
        return default

    def __repr__(self) -> str:
        return f"{type(self).__name__}(data={self.data!r}, validation_count={self.validation_count})"
