from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


Vertex = Tuple[float, float, float]
TextureVertex = Tuple[float, ...]
Normal = Tuple[float, float, float]


def _slot(indices: Optional[List[Optional[int]]], i: int) -> Optional[int]:
    if indices is None or i >= len(indices):
        return None

    return indices[i]


@dataclass
class Face:
    """
    One polygon. Indices are 0-based.

    `textures` and `normals` hold one optional slot per polygon vertex, so
    `textures[i]` belongs to `vertices[i]` even when only some of the face's
    tokens carried a texture index.
    """

    vertices: List[int]
    textures: Optional[List[Optional[int]]] = None
    normals: Optional[List[Optional[int]]] = None

    def texture_at(self, i: int) -> Optional[int]:
        return _slot(self.textures, i)

    def normal_at(self, i: int) -> Optional[int]:
        return _slot(self.normals, i)


@dataclass
class Mesh:
    """
    Represents the contents of a whole OBJ file.
    """

    vertices: List[Vertex] = field(default_factory=list)
    faces: List[Face] = field(default_factory=list)

    texture_vertices: Optional[List[TextureVertex]] = None
    normals: Optional[List[Normal]] = None

    objects: Optional[List[str]] = None
    groups: Optional[List[str]] = None
    materials: Optional[List[str]] = None
    smoothing_groups: Optional[List[str]] = None

    @property
    def triangles(self) -> List[Tuple[int, int, int]]:
        """
        Vertex indices of every face with exactly three vertices, in face
        order.
        """

        return [
            tuple(face.vertices) for face in self.faces
            if len(face.vertices) == 3
        ]

    @classmethod
    def parse_string(cls: 'Mesh', text: str, **kwargs) -> 'Mesh':
        from .parser import parse_obj_string

        return parse_obj_string(text, **kwargs)

    @classmethod
    def parse_bytes(cls: 'Mesh', data: Union[bytes, bytearray], **kwargs) -> 'Mesh':
        from .parser import parse_obj_bytes

        return parse_obj_bytes(data, **kwargs)

    def to_string(self) -> str:
        from .writer import write_obj

        return write_obj(self)
