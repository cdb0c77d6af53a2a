"""Unit tests for the matrix module.

Tests cover:
- Construction, indexing and approximate equality
- Multiplication by matrices and tuples
- Transpose, submatrix, minor, cofactor and determinant
- Inversion, including singular matrices
"""

import pytest


class TestMatrixConstruction:
    """Tests for building and reading matrices."""

    def test_construct_4x4(self):
        from src.raycaster.core.matrix import Matrix

        m = Matrix(
            [
                [1, 2, 3, 4],
                [5.5, 6.5, 7.5, 8.5],
                [9, 10, 11, 12],
                [13.5, 14.5, 15.5, 16.5],
            ]
        )
        assert m.size == 4
        assert m[0, 0] == 1
        assert m[0, 3] == 4
        assert m[1, 0] == 5.5
        assert m[1, 2] == 7.5
        assert m[2, 2] == 11
        assert m[3, 0] == 13.5
        assert m[3, 2] == 15.5

    def test_construct_2x2_and_3x3(self):
        from src.raycaster.core.matrix import Matrix

        m2 = Matrix([[-3, 5], [1, -2]])
        assert m2[0, 0] == -3
        assert m2[1, 1] == -2

        m3 = Matrix([[-3, 5, 0], [1, -2, -7], [0, 1, 1]])
        assert m3[1, 2] == -7
        assert m3[2, 2] == 1

    def test_non_square_raises(self):
        from src.raycaster.core.matrix import Matrix

        with pytest.raises(ValueError):
            Matrix([[1, 2, 3], [4, 5, 6]])

    def test_unsupported_size_raises(self):
        from src.raycaster.core.matrix import Matrix

        with pytest.raises(ValueError):
            Matrix([[1]])

    def test_matrix_is_immutable(self):
        from src.raycaster.core.matrix import Matrix

        m = Matrix.identity()
        copy = m.to_numpy()
        copy[0, 0] = 42.0
        assert m[0, 0] == 1.0

    def test_equality_is_approximate(self):
        from src.raycaster.core.matrix import Matrix

        a = Matrix([[1, 2], [3, 4]])
        b = Matrix([[1.000001, 2], [3, 4]])
        c = Matrix([[2, 3], [4, 5]])
        assert a == b
        assert a != c

    def test_different_sizes_are_not_equal(self):
        from src.raycaster.core.matrix import Matrix

        assert Matrix.identity(3) != Matrix.identity(4)


class TestMatrixMultiplication:
    """Tests for matrix products and tuple transforms."""

    def test_multiply_two_matrices(self):
        from src.raycaster.core.matrix import Matrix

        a = Matrix([[1, 2, 3, 4], [5, 6, 7, 8], [9, 8, 7, 6], [5, 4, 3, 2]])
        b = Matrix([[-2, 1, 2, 3], [3, 2, 1, -1], [4, 3, 6, 5], [1, 2, 7, 8]])
        expected = Matrix(
            [
                [20, 22, 50, 48],
                [44, 54, 114, 108],
                [40, 58, 110, 102],
                [16, 26, 46, 42],
            ]
        )
        assert a @ b == expected
        assert a * b == expected

    def test_multiply_by_tuple(self):
        from src.raycaster.core.matrix import Matrix
        from src.raycaster.core.tuple import Tuple

        a = Matrix([[1, 2, 3, 4], [2, 4, 4, 2], [8, 6, 4, 1], [0, 0, 0, 1]])
        assert a @ Tuple(1, 2, 3, 1) == Tuple(18, 24, 33, 1)

    def test_identity_is_neutral(self):
        from src.raycaster.core.matrix import IDENTITY, Matrix
        from src.raycaster.core.tuple import Tuple

        a = Matrix([[0, 1, 2, 4], [1, 2, 4, 8], [2, 4, 8, 16], [4, 8, 16, 32]])
        assert a @ IDENTITY == a
        assert IDENTITY @ Tuple(1, 2, 3, 4) == Tuple(1, 2, 3, 4)

    def test_mismatched_sizes_raise(self):
        from src.raycaster.core.matrix import Matrix

        with pytest.raises(ValueError):
            Matrix.identity(3) @ Matrix.identity(4)


class TestMatrixOperations:
    """Tests for transpose, submatrices, minors, cofactors and determinants."""

    def test_transpose(self):
        from src.raycaster.core.matrix import Matrix

        a = Matrix([[0, 9, 3, 0], [9, 8, 0, 8], [1, 8, 5, 3], [0, 0, 5, 8]])
        expected = Matrix([[0, 9, 1, 0], [9, 8, 8, 0], [3, 0, 5, 5], [0, 8, 3, 8]])
        assert a.transpose() == expected

    def test_transpose_identity(self):
        from src.raycaster.core.matrix import IDENTITY

        assert IDENTITY.transpose() == IDENTITY

    def test_determinant_2x2(self):
        from src.raycaster.core.matrix import Matrix

        assert Matrix([[1, 5], [-3, 2]]).determinant() == 17

    def test_submatrix(self):
        from src.raycaster.core.matrix import Matrix

        a = Matrix([[1, 5, 0], [-3, 2, 7], [0, 6, -3]])
        assert a.submatrix(0, 2) == Matrix([[-3, 2], [0, 6]])

        b = Matrix([[-6, 1, 1, 6], [-8, 5, 8, 6], [-1, 0, 8, 2], [-7, 1, -1, 1]])
        assert b.submatrix(2, 1) == Matrix([[-6, 1, 6], [-8, 8, 6], [-7, -1, 1]])

    def test_minor_and_cofactor(self):
        from src.raycaster.core.matrix import Matrix

        a = Matrix([[3, 5, 0], [2, -1, -7], [6, -1, 5]])
        assert a.minor(1, 0) == 25
        assert a.minor(0, 0) == -12
        assert a.cofactor(0, 0) == -12
        assert a.cofactor(1, 0) == -25

    def test_determinant_3x3(self):
        from src.raycaster.core.matrix import Matrix

        a = Matrix([[1, 2, 6], [-5, 8, -4], [2, 6, 4]])
        assert a.cofactor(0, 0) == 56
        assert a.cofactor(0, 1) == 12
        assert a.cofactor(0, 2) == -46
        assert a.determinant() == -196

    def test_determinant_4x4(self):
        from src.raycaster.core.matrix import Matrix

        a = Matrix([[-2, -8, 3, 5], [-3, 1, 7, 3], [1, 2, -9, 6], [-6, 7, 7, -9]])
        assert a.cofactor(0, 0) == 690
        assert a.cofactor(0, 1) == 447
        assert a.cofactor(0, 2) == 210
        assert a.cofactor(0, 3) == 51
        assert a.determinant() == -4071

    def test_tolist(self):
        from src.raycaster.core.matrix import Matrix

        assert Matrix([[1, 2], [3, 4]]).tolist() == [[1.0, 2.0], [3.0, 4.0]]


class TestMatrixInverse:
    """Tests for inversion."""

    def test_invertible_matrix(self):
        from src.raycaster.core.matrix import Matrix

        a = Matrix([[6, 4, 4, 4], [5, 5, 7, 6], [4, -9, 3, -7], [9, 1, 7, -6]])
        assert a.determinant() == -2120
        assert a.is_invertible()

    def test_singular_matrix(self):
        from src.raycaster.core.matrix import Matrix

        a = Matrix([[-4, 2, -2, -3], [9, 6, 2, 6], [0, -5, 1, -5], [0, 0, 0, 0]])
        assert a.determinant() == 0
        assert not a.is_invertible()

    def test_inverse_of_singular_matrix_raises(self):
        from src.raycaster.core.matrix import Matrix, NonInvertibleMatrixError

        a = Matrix([[-4, 2, -2, -3], [9, 6, 2, 6], [0, -5, 1, -5], [0, 0, 0, 0]])
        with pytest.raises(NonInvertibleMatrixError):
            a.inverse()

    def test_non_invertible_error_is_value_error(self):
        from src.raycaster.core.matrix import NonInvertibleMatrixError

        assert issubclass(NonInvertibleMatrixError, ValueError)

    def test_inverse_values(self):
        from src.raycaster.core.matrix import Matrix

        a = Matrix([[-5, 2, 6, -8], [1, -5, 1, 8], [7, 7, -6, -7], [1, -3, 7, 4]])
        b = a.inverse()
        assert a.determinant() == 532
        assert a.cofactor(2, 3) == -160
        assert abs(b[3, 2] - (-160 / 532)) < 1e-5
        assert a.cofactor(3, 2) == 105
        assert abs(b[2, 3] - (105 / 532)) < 1e-5
        expected = Matrix(
            [
                [0.21805, 0.45113, 0.24060, -0.04511],
                [-0.80827, -1.45677, -0.44361, 0.52068],
                [-0.07895, -0.22368, -0.05263, 0.19737],
                [-0.52256, -0.81391, -0.30075, 0.30639],
            ]
        )
        assert b == expected

    def test_inverse_of_another_matrix(self):
        from src.raycaster.core.matrix import Matrix

        a = Matrix([[8, -5, 9, 2], [7, 5, 6, 1], [-6, 0, 9, 6], [-3, 0, -9, -4]])
        expected = Matrix(
            [
                [-0.15385, -0.15385, -0.28205, -0.53846],
                [-0.07692, 0.12308, 0.02564, 0.03077],
                [0.35897, 0.35897, 0.43590, 0.92308],
                [-0.69231, -0.69231, -0.76923, -1.92308],
            ]
        )
        assert a.inverse() == expected

    def test_product_times_inverse_restores_matrix(self):
        from src.raycaster.core.matrix import Matrix

        a = Matrix([[3, -9, 7, 3], [3, -8, 2, -9], [-4, 4, 4, 1], [-6, 5, -1, 1]])
        b = Matrix([[8, 2, 2, 2], [3, -1, 7, 0], [7, 0, 5, 4], [6, -2, 0, 5]])
        c = a @ b
        assert c @ b.inverse() == a

    def test_matrix_times_inverse_is_identity(self):
        from src.raycaster.core.matrix import IDENTITY, Matrix

        a = Matrix([[9, 3, 0, 9], [-5, -2, -6, -3], [-4, 9, 6, 4], [-7, 6, 6, 2]])
        assert a @ a.inverse() == IDENTITY

    def test_inverse_of_inverse_restores_matrix(self):
        from src.raycaster.core.matrix import Matrix

        a = Matrix([[-5, 2, 6, -8], [1, -5, 1, 8], [7, 7, -6, -7], [1, -3, 7, 4]])
        assert a.inverse().inverse() == a

    @pytest.mark.parametrize(
        "components",
        [(1, -2, 3, 1), (-4, 0.5, 2, 0)],
        ids=["point", "vector"],
    )
    def test_transform_undoes_inverse_transform(self, components):
        from src.raycaster.core.matrix import Matrix
        from src.raycaster.core.tuple import Tuple

        m = Matrix([[3, -9, 7, 3], [3, -8, 2, -9], [-4, 4, 4, 1], [0, 0, 0, 1]])
        t = Tuple(*components)
        assert m @ (m.inverse() @ t) == t
