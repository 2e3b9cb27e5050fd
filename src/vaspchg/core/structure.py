"""Structure header collaborator (POSCAR block of a volumetric file).

Parsing of lattice, species and positions is delegated to pymatgen's
`Poscar`. This wrapper only exposes what the volumetric codec needs: the
scaled cell volume and a fixed-width textual rendering.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from vaspchg.core.errors import HeaderParseError

if TYPE_CHECKING:  # pragma: no cover
    from pymatgen.core import Structure
    from pymatgen.io.vasp import Poscar


def _fmt_row(values: Any) -> str:
    return "".join(f" {float(v):9.6f}" for v in values)


class StructureHeader:
    """Crystal structure block of a CHGCAR/CHG/PARCHG file."""

    def __init__(self, poscar: "Poscar"):
        self._poscar = poscar

    @classmethod
    def parse(cls, text: str) -> "StructureHeader":
        """Parse a POSCAR-style block.

        Raises:
            HeaderParseError: wrapping whatever pymatgen raised.
        """
        from pymatgen.io.vasp import Poscar

        if not isinstance(text, str):
            raise TypeError(f"StructureHeader.parse: expected str, got {type(text).__name__}")
        if not text.strip():
            raise HeaderParseError("structure block is empty")
        try:
            poscar = Poscar.from_str(text, read_velocities=False)
        except Exception as e:
            raise HeaderParseError(f"invalid structure block: {e}") from e
        return cls(poscar)

    @classmethod
    def from_structure(cls, structure: "Structure", *, comment: str | None = None) -> "StructureHeader":
        """Wrap a pymatgen `Structure` built in code."""
        from pymatgen.io.vasp import Poscar

        return cls(Poscar(structure, comment=comment))

    @property
    def poscar(self) -> "Poscar":
        return self._poscar

    @property
    def structure(self) -> "Structure":
        return self._poscar.structure

    @property
    def comment(self) -> str:
        return str(self._poscar.comment or "")

    @property
    def site_symbols(self) -> list[str]:
        return list(self._poscar.site_symbols)

    @property
    def natoms(self) -> list[int]:
        return [int(n) for n in self._poscar.natoms]

    def scaled_volume(self) -> float:
        """Cell volume in A^3 with the POSCAR scale factor applied."""
        return float(self.structure.lattice.volume)

    def format(self) -> str:
        """Render the block with 9-wide, 6-decimal numeric fields.

        The scale factor is folded into the lattice (written as 1.0) and
        positions are always written in fractional (Direct) coordinates.
        No trailing newline.
        """
        lines: list[str] = [self.comment, f"{1.0:19.14f}"]
        for vec in self.structure.lattice.matrix:
            lines.append(_fmt_row(vec))
        lines.append("".join(f" {s:>4}" for s in self.site_symbols))
        lines.append("".join(f" {n:>5}" for n in self.natoms))

        flags = self._poscar.selective_dynamics
        if flags is not None:
            lines.append("Selective dynamics")
        lines.append("Direct")
        for i, coords in enumerate(self.structure.frac_coords):
            row = _fmt_row(coords)
            if flags is not None:
                row += "".join(" T" if f else " F" for f in flags[i])
            lines.append(row)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"StructureHeader(comment={self.comment!r}, formula={self.structure.formula!r})"
