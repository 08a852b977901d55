# src/tetris_arcade/game/core/pieceset.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import yaml

# Canonical spawn orientations, '#' = filled block.
CLASSIC7_ROWS: Dict[str, Tuple[str, ...]] = {
    "T": (".#.", "###", "..."),
    "O": ("##", "##"),
    "L": ("..#", "###", "..."),
    "J": ("#..", "###", "..."),
    "I": ("....", "####", "....", "...."),
    "S": (".##", "##.", "..."),
    "Z": ("##.", ".##", "..."),
}


def _parse_shape(rows: Sequence[str], *, kind: str) -> np.ndarray:
    if not isinstance(rows, (list, tuple)) or len(rows) == 0:
        raise ValueError(f"{kind!r}: shape must be a non-empty list of strings")

    width = None
    out: List[List[int]] = []
    for r in rows:
        if not isinstance(r, str) or len(r) == 0:
            raise ValueError(f"{kind!r}: shape rows must be non-empty strings, got {r!r}")
        if width is None:
            width = len(r)
        elif len(r) != width:
            raise ValueError(f"{kind!r}: shape rows must have equal width, got widths {width} and {len(r)}")
        out.append([1 if ch == "#" else 0 for ch in r])

    arr = np.asarray(out, dtype=np.uint8)
    if int(arr.sum()) <= 0:
        raise ValueError(f"{kind!r}: shape must have at least one filled cell ('#')")
    return arr


def _freeze(arr: np.ndarray) -> np.ndarray:
    a = np.array(arr, dtype=np.uint8, copy=True)
    a.flags.writeable = False
    return a


@dataclass(frozen=True)
class PieceCatalog:
    """
    Immutable shape definitions keyed by piece kind.

    Stored matrices are read-only; shape() hands out a fresh writable copy so
    rotation and the active piece never alias a catalog entry.
    """

    pieces: Mapping[str, np.ndarray]
    kind_order: Tuple[str, ...]

    @classmethod
    def from_rows(cls, rows: Mapping[str, Sequence[str]]) -> "PieceCatalog":
        if not rows:
            raise ValueError("piece catalog must define at least one kind")
        pieces: Dict[str, np.ndarray] = {}
        for kind, spec in rows.items():
            if not isinstance(kind, str) or not kind:
                raise ValueError(f"piece key must be a non-empty string, got {kind!r}")
            pieces[kind] = _freeze(_parse_shape(spec, kind=kind))
        return cls(pieces=pieces, kind_order=tuple(pieces.keys()))

    @classmethod
    def classic7(cls) -> "PieceCatalog":
        return cls.from_rows(CLASSIC7_ROWS)

    @classmethod
    def from_yaml(cls, path: Path, *, expected_cells: Optional[int] = None) -> "PieceCatalog":
        """
        Load a catalog from YAML:

            expected_cells: 4        # optional
            pieces:
              T: [".#.", "###", "..."]
              O: ["##", "##"]
        """
        p = Path(path)
        data = yaml.safe_load(p.read_text(encoding="utf-8"))

        if not isinstance(data, dict):
            raise ValueError(f"piece YAML must be a mapping at top-level, got {type(data)!r}")

        if expected_cells is None:
            v = data.get("expected_cells", None)
            if isinstance(v, int) and not isinstance(v, bool):
                expected_cells = v
            elif v is not None:
                raise TypeError(f"expected_cells must be int, got {type(v)!r}")

        pieces_node = data.get("pieces")
        if not isinstance(pieces_node, dict) or not pieces_node:
            raise ValueError("piece YAML must contain non-empty mapping 'pieces:'")

        catalog = cls.from_rows(pieces_node)

        if expected_cells is not None:
            for kind in catalog.kinds():
                n = int(catalog.pieces[kind].sum())
                if n != int(expected_cells):
                    raise ValueError(f"{kind!r}: expected {expected_cells} filled cells, got {n}")
        return catalog

    def kinds(self) -> Tuple[str, ...]:
        return self.kind_order

    def __contains__(self, kind: object) -> bool:
        return kind in self.pieces

    def __len__(self) -> int:
        return len(self.kind_order)

    def canonical(self, kind: str) -> np.ndarray:
        """Read-only catalog matrix (do not keep references expecting to mutate it)."""
        try:
            return self.pieces[kind]
        except KeyError as e:
            raise KeyError(f"unknown piece kind {kind!r}. known kinds={list(self.kind_order)!r}") from e

    def shape(self, kind: str) -> np.ndarray:
        return self.canonical(kind).copy()

    def width(self, kind: str) -> int:
        return int(self.canonical(kind).shape[1])

    def kind_idx(self, kind: str) -> int:
        try:
            return int(self.kind_order.index(kind))
        except ValueError as e:
            raise KeyError(f"unknown piece kind {kind!r}") from e
