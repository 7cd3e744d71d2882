import argparse
import logging
from pathlib import Path

from earclip.parser import load_polygons, reproject, triangulate_polygons
from earclip.types import TriangleMesh


def main(argv=None) -> TriangleMesh:
    parser = argparse.ArgumentParser(prog="earclip", description="Triangulate polygons into a triangle mesh")
    parser.add_argument(
        "--target",
        required=True,
        type=Path,
        nargs="+",
        help="CityGML (.gml) or GeoJSON (.geojson/.json) files to triangulate",
    )
    parser.add_argument("--output", required=True, type=Path, help="mesh file; format follows the suffix (.ply, .obj, .stl, ...)")
    parser.add_argument("--modulo", type=float, default=None, help="split triangles on a grid with this spacing")
    parser.add_argument("--source-crs", default=None, help="CRS of the input coordinates, e.g. epsg:6697")
    parser.add_argument("--target-crs", default=None, help="CRS to reproject into, e.g. epsg:3857")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if (args.source_crs is None) != (args.target_crs is None):
        parser.error("--source-crs and --target-crs must be given together")

    merged = TriangleMesh()
    for file_path in args.target:
        logging.info(f"Processing start: {file_path}")
        polygons = load_polygons(file_path)
        logging.info(f"Loaded {len(polygons)} polygons: {file_path}")

        if args.source_crs is not None:
            logging.info(f"Reprojecting {args.source_crs} -> {args.target_crs}: {file_path}")
            polygons = reproject(polygons, args.source_crs, args.target_crs)

        logging.info(f"Triangulation: {file_path}")
        mesh = triangulate_polygons(polygons, args.modulo)
        merged.extend(mesh.vertices, mesh.triangles)
        logging.info(f"Processing end: {file_path} ({len(mesh.triangles)} triangles)")

    logging.info(f"Export: {args.output}")
    merged.to_trimesh().export(str(args.output))
    return merged


if __name__ == "__main__":
    main()
