"""
Scene representation produced by the importer.

A Scene holds a root Node, a flat list of line-segment Meshes and the
Materials applied to them. Each child node references exactly one mesh by
its index in Scene.meshes.
"""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class PrimitiveType(Enum):
    """Face primitive kinds"""

    POINT = 1
    LINE = 2
    TRIANGLE = 3


@dataclass
class Material:
    """Flat-colour material (RGBA components in 0..1)"""

    name: str
    diffuse: tuple[float, float, float, float]
    specular: tuple[float, float, float, float]
    ambient: tuple[float, float, float, float]


@dataclass
class Mesh:
    """Line-segment mesh; faces index into vertices"""

    name: str
    vertices: np.ndarray  # (n, 3) float64, absolute frame
    faces: np.ndarray  # (m, 2) uint32
    primitive_type: PrimitiveType = PrimitiveType.LINE
    material_index: int = 0

    @property
    def num_vertices(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def num_faces(self) -> int:
        return int(self.faces.shape[0])

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Axis-aligned (min, max) corners of the vertices"""
        return self.vertices.min(axis=0), self.vertices.max(axis=0)

    def length(self) -> float:
        """Total length of all line segments"""
        if self.num_faces == 0:
            return 0.0
        starts = self.vertices[self.faces[:, 0]]
        ends = self.vertices[self.faces[:, 1]]
        return float(np.linalg.norm(ends - starts, axis=1).sum())


@dataclass
class Node:
    """Scene-graph node"""

    name: str
    parent: "Node | None" = None
    children: list["Node"] = field(default_factory=list)
    meshes: list[int] = field(default_factory=list)

    def add_child(self, child: "Node") -> None:
        child.parent = self
        self.children.append(child)


@dataclass
class Scene:
    """Import result"""

    root: Node
    meshes: list[Mesh] = field(default_factory=list)
    materials: list[Material] = field(default_factory=list)

    @property
    def num_meshes(self) -> int:
        return len(self.meshes)

    def summary(self) -> dict:
        """Plain-data description of the scene for reporting"""
        meshes = []
        for mesh in self.meshes:
            lo, hi = mesh.bounds()
            meshes.append(
                {
                    "name": mesh.name,
                    "vertices": mesh.num_vertices,
                    "faces": mesh.num_faces,
                    "length": mesh.length(),
                    "bounds": [lo.tolist(), hi.tolist()],
                }
            )
        return {
            "root": self.root.name,
            "nodes": len(self.root.children),
            "materials": [m.name for m in self.materials],
            "meshes": meshes,
        }
