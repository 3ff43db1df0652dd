"""
Board - The fixed grid of tiles a game is played on.

The Board handles:
- Position-indexed tile lookup
- Wall and mechanism queries
- Row-major iteration over cells

Coordinate System:
- X increases to the RIGHT
- Y increases DOWNWARD (row index)
- Origin (0, 0) is the TOP-LEFT cell

A position that does not resolve to a tile is off the board; there is no
other notion of bounds.
"""

from __future__ import annotations
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .tiles import Tile
from ..core.types import GridPos, Orientation, TileExecution


class Board:
    """
    A rectangular grid of tiles, immutable once built.

    Attributes:
        width: Number of columns (X dimension)
        height: Number of rows (Y dimension)
    """

    def __init__(
            self,
            width: int,
            height: int,
            tiles: Optional[Mapping[GridPos, Tile]] = None
    ):
        """
        Initialize a board of plain floor, overriding individual cells.

        Args:
            width: Board width (must be positive)
            height: Board height (must be positive)
            tiles: Optional map of position -> Tile for non-plain cells

        Raises:
            ValueError: If dimensions are invalid or an override lies off the board
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive: {width}x{height}")

        self.width = width
        self.height = height

        plain = Tile.floor()
        self._rows: List[List[Tile]] = [[plain] * width for _ in range(height)]

        for pos, tile in (tiles or {}).items():
            if not self.in_bounds(pos):
                raise ValueError(f"Tile position out of bounds: {pos}")
            if not isinstance(tile, Tile):
                raise ValueError(f"Expected a Tile at {pos}, got {type(tile).__name__}")
            x, y = pos
            self._rows[y][x] = tile

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Tile]]) -> Board:
        """
        Build a board from rows of tiles (rows[y][x]).

        Raises:
            ValueError: If rows are empty or ragged
        """
        if not rows or not rows[0]:
            raise ValueError("Board needs at least one row and one column")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("All board rows must have the same length")

        tiles: Dict[GridPos, Tile] = {
            (x, y): tile
            for y, row in enumerate(rows)
            for x, tile in enumerate(row)
        }
        return cls(width, len(rows), tiles)

    # ========================================================================
    # LOOKUP
    # ========================================================================

    def in_bounds(self, pos: GridPos) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, pos: GridPos) -> Optional[Tile]:
        """
        Get the tile at a position.

        Args:
            pos: Position to look up (x, y)

        Returns:
            The tile, or None if the position is off the board
        """
        if not self.in_bounds(pos):
            return None
        x, y = pos
        return self._rows[y][x]

    def floor(self, pos: GridPos) -> Optional[Tile]:
        """Get the tile at a position only if it is a floor (not a pit or off-board)."""
        tile = self.tile(pos)
        if tile is None or not tile.is_floor:
            return None
        return tile

    def has_wall(self, pos: GridPos, side: Orientation) -> bool:
        """Check for a wall on one side of the floor at `pos`."""
        floor = self.floor(pos)
        return floor is not None and floor.has_wall(side)

    def mechanism_at(self, pos: GridPos, phase: TileExecution):
        """Get the mechanism acting at `pos` during `phase`, if any."""
        floor = self.floor(pos)
        if floor is None:
            return None
        return floor.mechanism_for(phase)

    # ========================================================================
    # ITERATION
    # ========================================================================

    def cells(self) -> Iterator[Tuple[GridPos, Tile]]:
        """Yield (position, tile) for every cell in row-major order."""
        for y, row in enumerate(self._rows):
            for x, tile in enumerate(row):
                yield (x, y), tile

    def __str__(self) -> str:
        return f"Board({self.width}x{self.height})"

    def __repr__(self) -> str:
        return f"Board(width={self.width}, height={self.height})"
