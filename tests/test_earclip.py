"""Tests for earclip, flatten, convert and deviation."""

import math
from collections import namedtuple

import pytest

from earclip import convert_2d, convert_3d, deviation, earclip, earcut, flatten

Point = namedtuple("Point", ["x", "y"])
Point3D = namedtuple("Point3D", ["x", "y", "z"])


class TestEarclip:
    def test_empty(self):
        assert earclip([]) == ([], [])

    def test_simple(self):
        polygon = [[[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]]
        vertices, indices = earclip(polygon)
        assert vertices == [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0, 0.0]
        assert indices == [1, 2, 0]

    def test_offset(self):
        polygon = [[[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]]
        _, indices = earclip(polygon, offset=10)
        assert indices == [11, 12, 10]

    def test_flat_points(self):
        geometry = [
            [
                [3506.0, -2048.0],
                [7464.0, 402.0],
                [-2048.0, 2685.0],
                [-2048.0, -2048.0],
                [3506.0, -2048.0],
            ],
            [
                [-2048.0, -37.0],
                [1235.0, 747.0],
                [338.0, -1464.0],
                [-116.0, -1188.0],
                [-2048.0, -381.0],
                [-2048.0, -37.0],
            ],
            [
                [-1491.0, -1981.0],
                [-1300.0, -1800.0],
                [-1155.0, -1981.0],
                [-1491.0, -1981.0],
            ],
        ]
        vertices, indices = earclip(geometry)
        assert vertices == [
            3506.0, -2048.0, 7464.0, 402.0, -2048.0, 2685.0, -2048.0, -2048.0, 3506.0, -2048.0,
            -2048.0, -37.0, 1235.0, 747.0, 338.0, -1464.0, -116.0, -1188.0, -2048.0, -381.0,
            -2048.0, -37.0, -1491.0, -1981.0, -1300.0, -1800.0, -1155.0, -1981.0, -1491.0, -1981.0,
        ]  # fmt: skip
        assert indices == [
            3, 11, 12, 13, 11, 3, 2, 5, 6, 7, 8, 9, 9, 3, 12, 13, 3, 0, 1, 2, 6, 7, 9, 12,
            12, 13, 0, 0, 1, 6, 7, 12, 0, 0, 6, 7,
        ]  # fmt: skip

    def test_modulo_tesselates(self):
        polygon = [[[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]]]
        plain_vertices, plain_indices = earclip(polygon)
        vertices, indices = earclip(polygon, modulo=5.0)
        assert len(vertices) > len(plain_vertices)
        assert len(indices) > len(plain_indices)
        assert all(0 <= index < len(vertices) // 2 for index in indices)

    def test_point_objects(self):
        polygon = [[Point(0.0, 0.0), Point(1.0, 0.0), Point(0.0, 1.0)]]
        vertices, indices = earclip(polygon)
        assert vertices == [0.0, 0.0, 1.0, 0.0, 0.0, 1.0]
        assert indices == [1, 2, 0]


class TestFlatten:
    def test_holes(self):
        data = [
            [[0, 0], [10, 0], [10, 10], [0, 10]],
            [[2, 2], [4, 2], [4, 4]],
            [[6, 6], [8, 6], [8, 8]],
        ]
        vertices, holes, dim = flatten(data)
        assert dim == 2
        assert holes == [4, 7]
        assert len(vertices) == 20

    def test_3d(self):
        vertices, holes, dim = flatten([[[0, 0, 1], [1, 0, 2], [0, 1, 3]]])
        assert dim == 3
        assert holes == []
        assert vertices == [0, 0, 1, 1, 0, 2, 0, 1, 3]

    def test_point_objects_3d(self):
        vertices, _, dim = flatten([[Point3D(0, 0, 1), Point3D(1, 0, 2), Point3D(0, 1, 3)]])
        assert dim == 3
        assert vertices == [0, 0, 1, 1, 0, 2, 0, 1, 3]

    def test_empty(self):
        assert flatten([]) == ([], [], 2)
        assert flatten([[]]) == ([], [], 2)


class TestConvert:
    def test_convert_2d(self):
        assert convert_2d([[Point(1, 2), Point(3, 4)]]) == [[[1, 2], [3, 4]]]

    def test_convert_3d(self):
        assert convert_3d([[Point3D(1, 2, 3)], [Point3D(4, 5, 6)]]) == [[[1, 2, 3]], [[4, 5, 6]]]


class TestDeviation:
    def test_exact_triangulation(self):
        data = [0, 0, 10, 0, 10, 10, 0, 10, 2, 2, 8, 2, 8, 8, 2, 8]
        assert deviation(data, [4], 2, earcut(data, [4])) == 0

    def test_missing_triangles(self):
        data = [0, 0, 10, 0, 10, 10, 0, 10]
        indices = earcut(data)
        assert deviation(data, [], 2, indices[:3]) == pytest.approx(0.5)

    def test_zero_area(self):
        data = [0, 0, 1, 1, 2, 2]
        assert deviation(data, [], 2, []) == 0

    def test_zero_area_with_triangles(self):
        # bowtie: the two lobes cancel in the shoelace sum
        data = [0, 0, 2, 2, 2, 0, 0, 2]
        indices = earcut(data)
        assert indices == [3, 2, 1]
        assert deviation(data, [], 2, indices) == math.inf
