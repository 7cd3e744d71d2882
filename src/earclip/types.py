from dataclasses import dataclass, field

import numpy as np
from trimesh import Trimesh


@dataclass
class TriangleMesh:
    vertices: list[np.ndarray] = field(default_factory=list)
    triangles: list[np.ndarray] = field(default_factory=list)

    def extend(self, vertices: np.ndarray, triangles: np.ndarray) -> None:
        """Appends a mesh whose triangle indices start at zero"""
        offset = len(self.vertices)
        self.vertices.extend(np.asarray(vertices, dtype=np.float64))
        self.triangles.extend(np.asarray(triangles, dtype=np.int64).reshape(-1, 3) + offset)

    def to_trimesh(self) -> Trimesh:
        vertices = np.asarray(self.vertices, dtype=np.float64).reshape(-1, 3) if self.vertices else np.zeros((0, 3))
        faces = np.asarray(self.triangles, dtype=np.int64).reshape(-1, 3) if self.triangles else np.zeros((0, 3), int)
        return Trimesh(vertices=vertices, faces=faces, process=False)
