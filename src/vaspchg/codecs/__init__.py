"""Codecs for the VASP volumetric file family (CHGCAR, CHG, PARCHG)."""

from __future__ import annotations

from .vasp_chg import build, format_chg_text, parse, parse_chg_text, read_chg, write, write_chg

__all__ = [
    "build",
    "format_chg_text",
    "parse",
    "parse_chg_text",
    "read_chg",
    "write",
    "write_chg",
]
