"""
Wavefront OBJ writer.

Sections are always written in this order, each one only if the mesh has
it:

    o, v, vt, vn, g, usemtl, s, f

Object, group, material and smoothing group directives are hoisted above
every face, so where they sat between faces in the source file is not
kept. Parsing the output again gives back the same Mesh.
"""

from typing import Iterable, List, Optional

from .mesh import Face, Mesh
from .util import format_number


def _join(values: Iterable) -> str:
    return " ".join(format_number(value) for value in values)


def _index(index) -> str:
    # 0-based in memory, 1-based in the file.
    return format_number(index + 1)


def format_face_vertex(vertex: int, texture: Optional[int], normal: Optional[int]) -> str:
    if texture is not None and normal is not None:
        return f"{_index(vertex)}/{_index(texture)}/{_index(normal)}"
    elif texture is not None:
        return f"{_index(vertex)}/{_index(texture)}"
    elif normal is not None:
        return f"{_index(vertex)}//{_index(normal)}"

    return _index(vertex)


def format_face(face: Face) -> str:
    """
    A texture or normal list shorter than `vertices` leaves the remaining
    slots absent; entries past the end of `vertices` are not written.
    """

    tokens = [
        format_face_vertex(vertex, face.texture_at(i), face.normal_at(i))
        for i, vertex in enumerate(face.vertices)
    ]

    return " ".join(["f"] + tokens)


def write_obj(mesh: Mesh) -> str:
    lines: List[str] = []

    for name in mesh.objects or []:
        lines.append(f"o {name}")

    for vertex in mesh.vertices:
        lines.append(f"v {_join(vertex)}")

    for texture_vertex in mesh.texture_vertices or []:
        lines.append(f"vt {_join(texture_vertex)}")

    for normal in mesh.normals or []:
        lines.append(f"vn {_join(normal)}")

    for name in mesh.groups or []:
        lines.append(f"g {name}")

    for name in mesh.materials or []:
        lines.append(f"usemtl {name}")

    for name in mesh.smoothing_groups or []:
        lines.append(f"s {name}")

    # `triangles` is only a view over the faces, so it is never written.
    for face in mesh.faces:
        lines.append(format_face(face))

    return "".join(f"{line}\n" for line in lines)
