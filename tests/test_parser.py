import json

import numpy as np
import pytest

from earclip.__main__ import main
from earclip.parser import (
    load_geojson_polygons,
    load_gml_polygons,
    load_polygons,
    reproject,
    triangulate_polygons,
)

GML = """<?xml version="1.0" encoding="UTF-8"?>
<core:CityModel xmlns:core="http://www.opengis.net/citygml/2.0" xmlns:gml="http://www.opengis.net/gml">
  <gml:Polygon>
    <gml:exterior>
      <gml:LinearRing>
        <gml:posList srsDimension="3">0 0 1 10 0 1 10 10 1 0 10 1 0 0 1</gml:posList>
      </gml:LinearRing>
    </gml:exterior>
    <gml:interior>
      <gml:LinearRing>
        <gml:posList srsDimension="3">2 2 1 2 8 1 8 8 1 8 2 1 2 2 1</gml:posList>
      </gml:LinearRing>
    </gml:interior>
  </gml:Polygon>
  <gml:Polygon>
    <gml:exterior>
      <gml:LinearRing>
        <gml:posList srsDimension="3">0 0 0 5 0 0 5 0 5 0 0 0</gml:posList>
      </gml:LinearRing>
    </gml:exterior>
  </gml:Polygon>
</core:CityModel>
"""

SQUARE = [[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0], [0.0, 0.0]]


def _geojson(tmp_path, doc, name="input.geojson"):
    path = tmp_path / name
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


@pytest.fixture
def gml_file(tmp_path):
    path = tmp_path / "building.gml"
    path.write_text(GML, encoding="utf-8")
    return path


class TestLoad:
    def test_gml(self, gml_file):
        polygons = load_gml_polygons(gml_file)
        assert len(polygons) == 2
        outer, hole = polygons[0]
        assert outer.shape == (4, 3)
        assert hole.shape == (4, 3)
        assert polygons[1][0].shape == (3, 3)

    def test_geojson_feature_collection(self, tmp_path):
        doc = {
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "properties": {}, "geometry": {"type": "Polygon", "coordinates": [SQUARE]}},
                {"type": "Feature", "properties": {}, "geometry": {"type": "Point", "coordinates": [1.0, 2.0]}},
                {"type": "Feature", "properties": {}, "geometry": None},
                {
                    "type": "Feature",
                    "properties": {},
                    "geometry": {"type": "MultiPolygon", "coordinates": [[SQUARE], [SQUARE]]},
                },
            ],
        }
        polygons = load_geojson_polygons(_geojson(tmp_path, doc))
        assert len(polygons) == 3
        assert all(polygon[0].shape == (4, 2) for polygon in polygons)

    def test_geojson_mixed_positions_and_empty_ring(self, tmp_path):
        exterior = [[0.0, 0.0, 0.0], [10.0, 0.0], [10.0, 10.0, 0.0, 7.0], [0.0, 10.0], [0.0, 0.0, 0.0]]
        doc = {"type": "Polygon", "coordinates": [exterior, []]}
        polygons = load_geojson_polygons(_geojson(tmp_path, doc))
        assert len(polygons) == 1
        assert len(polygons[0]) == 1
        assert polygons[0][0].shape == (4, 3)
        assert polygons[0][0][1].tolist() == [10.0, 0.0, 0.0]

        mesh = triangulate_polygons(polygons)
        assert mesh.to_trimesh().area == pytest.approx(100.0)

    def test_geojson_empty_exterior_is_skipped(self, tmp_path):
        doc = {"type": "MultiPolygon", "coordinates": [[[]], [SQUARE]]}
        polygons = load_geojson_polygons(_geojson(tmp_path, doc))
        assert len(polygons) == 1

    def test_dispatch_on_suffix(self, tmp_path, gml_file):
        assert len(load_polygons(gml_file)) == 2
        path = _geojson(tmp_path, {"type": "Polygon", "coordinates": [SQUARE]}, name="square.json")
        assert len(load_polygons(path)) == 1

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "mesh.obj"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ValueError):
            load_polygons(path)


class TestTriangulate:
    def test_polygon_with_hole(self, gml_file):
        mesh = triangulate_polygons(load_gml_polygons(gml_file)[:1])
        assert len(mesh.vertices) == 8
        assert len(mesh.triangles) == 8
        assert mesh.to_trimesh().area == pytest.approx(64.0)

    def test_vertical_polygon(self, gml_file):
        mesh = triangulate_polygons(load_gml_polygons(gml_file)[1:])
        assert len(mesh.triangles) == 1
        assert mesh.to_trimesh().area == pytest.approx(12.5)

    def test_meshes_are_offset(self, gml_file):
        mesh = triangulate_polygons(load_gml_polygons(gml_file))
        assert len(mesh.vertices) == 11
        triangles = np.asarray(mesh.triangles)
        assert triangles[-1].min() >= 8
        assert mesh.to_trimesh().area == pytest.approx(76.5)

    def test_degenerate_polygon_is_skipped(self):
        line = [np.array([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0], [2.0, 2.0, 2.0]])]
        mesh = triangulate_polygons([line])
        assert mesh.vertices == []
        assert mesh.triangles == []

    def test_modulo_keeps_area(self, tmp_path):
        path = _geojson(tmp_path, {"type": "Polygon", "coordinates": [SQUARE]})
        mesh = triangulate_polygons(load_polygons(path), modulo=4.0)
        assert len(mesh.triangles) > 2
        assert mesh.to_trimesh().area == pytest.approx(100.0)


def test_reproject_follows_crs_axis_order():
    ring = np.array([[0.0, 0.0, 5.0], [0.0, 1.0, 5.0], [1.0, 1.0, 5.0]])
    (projected,) = reproject([[ring]], "epsg:4326", "epsg:3857")
    # epsg:4326 is latitude first
    assert projected[0][1, 0] == pytest.approx(111319.49, abs=0.01)
    assert projected[0][1, 1] == pytest.approx(0.0, abs=1e-6)
    assert projected[0][:, 2].tolist() == [5.0, 5.0, 5.0]
    assert ring[1, 0] == 0.0


class TestMain:
    def test_writes_mesh(self, tmp_path):
        source = _geojson(tmp_path, {"type": "Polygon", "coordinates": [SQUARE]})
        output = tmp_path / "out.ply"
        mesh = main(["--target", str(source), "--output", str(output)])
        assert output.exists()
        assert len(mesh.triangles) == 2

    def test_merges_targets(self, tmp_path, gml_file):
        source = _geojson(tmp_path, {"type": "Polygon", "coordinates": [SQUARE]})
        output = tmp_path / "out.obj"
        mesh = main(["--target", str(source), str(gml_file), "--output", str(output), "--modulo", "5"])
        assert output.exists()
        assert mesh.to_trimesh().area == pytest.approx(100.0 + 64.0 + 12.5)

    def test_crs_flags_go_together(self, tmp_path):
        source = _geojson(tmp_path, {"type": "Polygon", "coordinates": [SQUARE]})
        with pytest.raises(SystemExit):
            main(["--target", str(source), "--output", str(tmp_path / "out.ply"), "--source-crs", "epsg:4326"])
