import json
import logging
from pathlib import Path
from typing import Optional

import lxml.etree as et
import numpy as np
import pyproj

from earclip.earcut import Store, earcut
from earclip.tesselate import tesselate
from earclip.types import TriangleMesh
from earclip.utils_3d import project3d_to_2d

logger = logging.getLogger(__name__)

_NS = {
    "gml": "http://www.opengis.net/gml",
}

_GML_SUFFIXES = {".gml", ".xml", ".citygml"}
_GEOJSON_SUFFIXES = {".json", ".geojson"}


def _open_ring(vertices: np.ndarray) -> np.ndarray:
    # rings are stored closed; earcut wants them open
    if len(vertices) > 1 and np.array_equal(vertices[0], vertices[-1]):
        return vertices[:-1]
    return vertices


def _pos_list(element) -> np.ndarray:
    vertices = np.array(element.text.split(), dtype=np.float64)
    dim = int(element.get("srsDimension", "3"))
    if len(vertices) % dim != 0:
        raise ValueError(f"posList length {len(vertices)} is not a multiple of {dim}")
    return _open_ring(vertices.reshape(-1, dim))


def load_gml_polygons(file_path: Path) -> list[list[np.ndarray]]:
    """Reads every ``gml:Polygon`` of a (City)GML document as a list of rings"""
    doc = et.parse(str(file_path), None)

    polygons = []
    for polygon in doc.iterfind(".//gml:Polygon", _NS):
        pos_list = polygon.find("./gml:exterior//gml:posList", _NS)
        if pos_list is None or not pos_list.text:
            continue
        exterior = _pos_list(pos_list)
        if len(exterior) < 3:
            continue
        rings = [exterior]
        for pos_list in polygon.iterfind("./gml:interior//gml:posList", _NS):
            rings.append(_pos_list(pos_list))
        polygons.append(rings)

    return polygons


def _geojson_geometries(doc):
    kind = doc.get("type")
    if kind == "FeatureCollection":
        for feature in doc["features"]:
            yield from _geojson_geometries(feature)
    elif kind == "Feature":
        if doc.get("geometry"):
            yield from _geojson_geometries(doc["geometry"])
    elif kind == "GeometryCollection":
        for geometry in doc["geometries"]:
            yield from _geojson_geometries(geometry)
    else:
        yield doc


def _geojson_rings(part) -> list[np.ndarray]:
    # positions can mix 2D and 3D or carry extra values; pad to a common width
    rings = [[position[:3] for position in ring] for ring in part if ring]
    dim = max((len(position) for ring in rings for position in ring), default=2)
    return [
        _open_ring(np.array([list(position) + [0.0] * (dim - len(position)) for position in ring], dtype=np.float64))
        for ring in rings
    ]


def load_geojson_polygons(file_path: Path) -> list[list[np.ndarray]]:
    """Reads Polygon and MultiPolygon geometries of a GeoJSON document"""
    with open(file_path, encoding="utf-8") as f:
        doc = json.load(f)

    polygons = []
    for geometry in _geojson_geometries(doc):
        if geometry["type"] == "Polygon":
            parts = [geometry["coordinates"]]
        elif geometry["type"] == "MultiPolygon":
            parts = geometry["coordinates"]
        else:
            logger.debug(f"Skipping {geometry['type']} geometry")
            continue
        for part in parts:
            # an empty exterior leaves nothing to triangulate
            if not part or not part[0]:
                continue
            polygons.append(_geojson_rings(part))

    return polygons


def load_polygons(file_path: Path) -> list[list[np.ndarray]]:
    suffix = Path(file_path).suffix.lower()
    if suffix in _GML_SUFFIXES:
        return load_gml_polygons(file_path)
    if suffix in _GEOJSON_SUFFIXES:
        return load_geojson_polygons(file_path)
    raise ValueError(f"Unsupported input format: {file_path}")


def reproject(polygons: list[list[np.ndarray]], source_crs: str, target_crs: str) -> list[list[np.ndarray]]:
    """Transforms the first two coordinates of every ring, in the axis order of the CRS definitions"""
    transformer = pyproj.Transformer.from_crs(source_crs, target_crs)
    result = []
    for polygon in polygons:
        rings = []
        for ring in polygon:
            ring = ring.copy()
            xx, yy = transformer.transform(ring[:, 0], ring[:, 1])
            ring[:, 0] = np.asarray(xx)
            ring[:, 1] = np.asarray(yy)
            rings.append(ring)
        result.append(rings)
    return result


def _as_3d(vertex: np.ndarray) -> np.ndarray:
    if vertex.shape[1] >= 3:
        return vertex[:, :3]
    return np.hstack([vertex[:, :2], np.zeros((len(vertex), 1))])


def triangulate_polygons(polygons: list[list[np.ndarray]], modulo: Optional[float] = None) -> TriangleMesh:
    mesh = TriangleMesh()
    store = Store()
    for polygon in polygons:
        vertex = _as_3d(np.vstack(polygon))
        hole_indices = []
        if len(polygon) > 1:
            hi = polygon[0].shape[0]
            for ring in polygon[1:]:
                hole_indices.append(hi)
                hi += ring.shape[0]

        flatten_vertices = vertex.flatten().tolist()
        planar = project3d_to_2d(flatten_vertices, len(polygon[0]))
        if planar is None:
            logger.debug(f"Skipping degenerate polygon with {len(vertex)} vertices")
            continue

        cut = earcut(planar, hole_indices, dim=2, store=store)
        if not cut:
            continue

        if modulo is not None:
            tesselate(flatten_vertices, cut, modulo, 3)

        mesh.extend(np.asarray(flatten_vertices).reshape(-1, 3), np.asarray(cut))

    return mesh
