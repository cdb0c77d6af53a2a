"""Square matrices for affine transforms in homogeneous coordinates.

Matrix is an immutable value type backed by a float64 NumPy array. The 4x4
case carries every transform in the scene; 3x3 and 2x2 matrices appear as
sub-matrices during cofactor expansion.

The determinant is computed by recursive cofactor expansion along row 0,
bottoming out at the 2x2 case (ad - bc). The inverse uses the
adjugate-transpose formula:

    inverse[col, row] = cofactor(row, col) / determinant

Transform composition is right-to-left: ``T3 @ T2 @ T1`` applies T1 first.

Example:
    >>> from src.raycaster.core.matrix import Matrix
    >>> from src.raycaster.core.tuple import point
    >>> m = Matrix([[1, 0, 0, 5], [0, 1, 0, -3], [0, 0, 1, 2], [0, 0, 0, 1]])
    >>> m @ point(-3, 4, 5)
    Tuple(x=2, y=1, z=7, w=1)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import overload

import numpy as np
import numpy.typing as npt

from src.raycaster.core.tolerance import EPSILON, approx_zero
from src.raycaster.core.tuple import Tuple

MIN_SIZE = 2
MAX_SIZE = 4


class NonInvertibleMatrixError(ValueError):
    """Raised when the inverse of a singular matrix is requested."""


class Matrix:
    """An immutable square matrix of size 2, 3 or 4.

    Attributes:
        size: Number of rows (and columns).
    """

    __slots__ = ("_data",)

    def __init__(self, rows: Sequence[Sequence[float]] | npt.ArrayLike) -> None:
        """Build a matrix from nested rows.

        Args:
            rows: Row-major values; must form a square grid of size 2..4.

        Raises:
            ValueError: If the values do not form a supported square matrix.
        """
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise ValueError(f"Matrix must be square, got shape {data.shape}")
        if not MIN_SIZE <= data.shape[0] <= MAX_SIZE:
            raise ValueError(
                f"Matrix size must be between {MIN_SIZE} and {MAX_SIZE}, got {data.shape[0]}"
            )
        data.setflags(write=False)
        self._data = data

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        """Return the identity matrix of the given size."""
        return cls(np.identity(size))

    @property
    def size(self) -> int:
        return int(self._data.shape[0])

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self._data[row, col])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.size != other.size:
            return False
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None  # type: ignore[assignment]

    @overload
    def __matmul__(self, other: Matrix) -> Matrix: ...

    @overload
    def __matmul__(self, other: Tuple) -> Tuple: ...

    def __matmul__(self, other: Matrix | Tuple) -> Matrix | Tuple:
        """Multiply by another matrix (product) or a tuple (transform)."""
        if isinstance(other, Matrix):
            if other.size != self.size:
                raise ValueError(f"Cannot multiply {self.size}x{self.size} by {other.size}x{other.size}")
            return Matrix(self._data @ other._data)
        if isinstance(other, Tuple):
            if self.size != 4:
                raise ValueError("Only 4x4 matrices can transform tuples")
            x, y, z, w = self._data @ other.to_numpy()
            return Tuple(float(x), float(y), float(z), float(w))
        return NotImplemented

    __mul__ = __matmul__

    def transpose(self) -> Matrix:
        return Matrix(self._data.T)

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        if self.size <= MIN_SIZE:
            raise ValueError("Cannot take a submatrix of a 2x2 matrix")
        reduced = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix(reduced)

    def minor(self, row: int, col: int) -> float:
        """Determinant of the submatrix at (row, col)."""
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        """Signed minor: (-1)^(row + col) * minor(row, col)."""
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 else minor

    def determinant(self) -> float:
        """Determinant by cofactor expansion along the first row."""
        if self.size == 2:
            m = self._data
            return float(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])
        return sum(float(self._data[0, col]) * self.cofactor(0, col) for col in range(self.size))

    def is_invertible(self) -> bool:
        return not approx_zero(self.determinant())

    def inverse(self) -> Matrix:
        """Return the inverse matrix.

        Returns:
            The matrix M' with M @ M' equal to the identity.

        Raises:
            NonInvertibleMatrixError: If the determinant is zero within EPSILON.
        """
        det = self.determinant()
        if approx_zero(det):
            raise NonInvertibleMatrixError(f"Matrix is not invertible (determinant={det:g})")

        n = self.size
        result = np.empty((n, n), dtype=np.float64)
        for row in range(n):
            for col in range(n):
                # Swapped indices transpose the cofactor matrix
                result[col, row] = self.cofactor(row, col) / det
        return Matrix(result)

    def tolist(self) -> list[list[float]]:
        return self._data.tolist()

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a writable copy of the underlying array."""
        return self._data.copy()

    def __repr__(self) -> str:
        rows = ", ".join("[" + ", ".join(f"{v:g}" for v in row) + "]" for row in self._data)
        return f"Matrix([{rows}])"


IDENTITY = Matrix.identity(4)
