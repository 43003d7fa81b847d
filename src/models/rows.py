"""
Output Row Types

One dataclass per CSV produced by the pipeline. Field order matches the
column order of the corresponding CSV header in src.config.
"""

from dataclasses import dataclass, astuple
from typing import Tuple


@dataclass(frozen=True)
class DiagnosisRow:
    """One criterion of the diagnosis catalogue, with its enclosing category."""

    category_key: str
    category_name: str
    criterion_key: str
    criterion_name: str
    description: str = ""

    def as_record(self) -> Tuple[str, ...]:
        return astuple(self)


@dataclass(frozen=True)
class MorphologyRow:
    """
    One topography/morphology combination recovered from the site/type PDF.

    The first four fields are copied from the section state at the time the
    entry line was read.
    """

    site_group: str
    topography_codes: str
    label: str
    topography: str
    morphology: str
    description: str

    def as_record(self) -> Tuple[str, ...]:
        return astuple(self)


__all__ = [
    "DiagnosisRow",
    "MorphologyRow",
]
