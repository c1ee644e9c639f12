
"""Piece catalog: the 7 shapes and their precomputed counterclockwise rotations"""
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Sequence, Tuple

log = logging.getLogger(__name__)

Point = Tuple[int, int]

# x,y pairs with y pointing up; index order matters for seeded piece sequences
PIECE_SPECS: Tuple[str, ...] = (
    "0 0  0 1  0 2  0 3",   # 0 I
    "0 0  0 1  0 2  1 0",   # 1 L
    "0 0  1 0  1 1  1 2",   # 2 J
    "0 0  1 0  1 1  2 1",   # 3 S
    "0 1  1 1  1 0  2 0",   # 4 Z
    "0 0  0 1  1 0  1 1",   # 5 O
    "0 0  1 0  1 1  2 0",   # 6 T
)
PIECE_NAMES: Tuple[str, ...] = ("I", "L", "J", "S", "Z", "O", "T")


class PieceParseError(ValueError):
    """Raised when a piece geometry string cannot be turned into a body."""


def parse_points(text: str) -> List[Point]:
    """Parse whitespace separated "x y" pairs, e.g. "0 0  0 1  1 0"."""
    tokens = text.split()
    if not tokens or len(tokens) % 2:
        raise PieceParseError(f"Could not parse x,y string: {text!r}")
    try:
        values = [int(t) for t in tokens]
    except ValueError as e:
        raise PieceParseError(f"Could not parse x,y string: {text!r}") from e
    return list(zip(values[0::2], values[1::2]))


@dataclass(frozen=True)
class Piece:
    """One rotation of one shape. Two pieces are equal when their bodies hold
    the same cells, regardless of shape index or rotation number."""
    body: FrozenSet[Point]
    width: int = field(compare=False)
    height: int = field(compare=False)
    skirt: Tuple[int, ...] = field(compare=False)  # lowest y per local column
    kind: int = field(default=0, compare=False)
    rotation: int = field(default=0, compare=False)

    @staticmethod
    def from_points(points: Iterable[Point], kind: int = 0, rotation: int = 0) -> "Piece":
        body = frozenset(points)
        if not body:
            raise PieceParseError("piece body is empty")
        if any(x < 0 or y < 0 for x, y in body):
            raise PieceParseError(f"negative offset in body {sorted(body)}")
        width = max(x for x, _ in body) + 1
        height = max(y for _, y in body) + 1
        skirt = []
        for col in range(width):
            ys = [y for x, y in body if x == col]
            if not ys:
                raise PieceParseError(f"column {col} of body {sorted(body)} is empty")
            skirt.append(min(ys))
        return Piece(body, width, height, tuple(skirt), kind, rotation)

    @property
    def name(self) -> str:
        return PIECE_NAMES[self.kind] if 0 <= self.kind < len(PIECE_NAMES) else str(self.kind)

    def rotated(self) -> "Piece":
        """Return this body turned 90 degrees counterclockwise: swap x,y then
        mirror across the new width so the shape still sits at the origin."""
        swapped = [(y, x) for x, y in self.body]
        w = max(x for x, _ in swapped) + 1
        return Piece.from_points(((w - 1) - x, y) for x, y in swapped)


def rotation_cycle(root: Piece) -> Tuple[Piece, ...]:
    """All distinct rotations of root, in counterclockwise order, starting at root."""
    cycle = [root]
    current = root.rotated()
    while current != root:
        cycle.append(current)
        current = current.rotated()
    return tuple(
        Piece(p.body, p.width, p.height, p.skirt, root.kind, i)
        for i, p in enumerate(cycle)
    )


class PieceCatalog:
    """Immutable table of rotation cycles, built once and shared read-only."""

    def __init__(self, specs: Sequence[str] = PIECE_SPECS):
        self.rotations: Tuple[Tuple[Piece, ...], ...] = tuple(
            rotation_cycle(Piece.from_points(parse_points(spec), kind))
            for kind, spec in enumerate(specs)
        )
        log.debug("piece catalog built: cycle lengths %s",
                  [len(r) for r in self.rotations])

    def pieces(self) -> Tuple[Piece, ...]:
        """First rotation of every shape."""
        return tuple(cycle[0] for cycle in self.rotations)

    def next_rotation(self, piece: Piece) -> Piece:
        """Rotation after piece. Pieces built outside the catalog are matched
        by their cells; a shape the catalog does not know raises ValueError."""
        cycle, index = self._locate(piece)
        return cycle[(index + 1) % len(cycle)]

    def _locate(self, piece: Piece) -> Tuple[Tuple[Piece, ...], int]:
        if 0 <= piece.kind < len(self.rotations):
            cycle = self.rotations[piece.kind]
            if 0 <= piece.rotation < len(cycle) and cycle[piece.rotation] == piece:
                return cycle, piece.rotation
        for cycle in self.rotations:
            for i, p in enumerate(cycle):
                if p == piece:
                    return cycle, i
        raise ValueError(f"piece {sorted(piece.body)} is not in the catalog")

    def __len__(self):
        return len(self.rotations)


CATALOG = PieceCatalog()


def get_pieces() -> Tuple[Piece, ...]:
    return CATALOG.pieces()


def next_rotation(piece: Piece) -> Piece:
    return CATALOG.next_rotation(piece)
