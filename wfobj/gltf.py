"""
Export the triangle view of a Mesh to glTF 2.0.

Only faces with exactly three vertices are exported; larger polygons are
skipped, not triangulated.
"""

import io
import math
import struct
from typing import List

import pygltflib

from .mesh import Mesh, Vertex


class MinMaxTracker:
    def __init__(self):
        self.min = None
        self.max = None

    def add(self, v):
        if self.min is None or v < self.min:
            self.min = v

        if self.max is None or v > self.max:
            self.max = v


def _check_index(index, vertex_count: int):
    if not isinstance(index, int) or not 0 <= index < vertex_count:
        raise ValueError(
            f"Triangle index {index} is out of range for {vertex_count} vertices"
        )


def _pack_position(vertex: Vertex, vertex_index: int) -> bytes:
    if not all(math.isfinite(x) for x in vertex):
        raise ValueError(f"Vertex {vertex_index} is not finite: {vertex}")

    try:
        return struct.pack("<fff", *vertex)
    except OverflowError:
        raise ValueError(
            f"Vertex {vertex_index} does not fit in float32: {vertex}"
        ) from None


def mesh_to_gltf(mesh: Mesh, name: str = "mesh") -> pygltflib.GLTF2:
    """
    Pack the mesh positions and triangles into a single-buffer glTF.

    The buffer holds the uint32 triangle indices first, followed by the
    float32 positions.
    """

    triangles = mesh.triangles

    if not triangles:
        raise ValueError("Mesh has no triangles to export")

    vertex_count = len(mesh.vertices)

    triangle_io = io.BytesIO()
    vertex_io = io.BytesIO()

    index_minmax = MinMaxTracker()
    # One tracker per x, y, z component.
    axis_minmax = [MinMaxTracker() for _ in range(3)]

    for triangle in triangles:
        for index in triangle:
            _check_index(index, vertex_count)
            index_minmax.add(index)

        triangle_io.write(struct.pack("<III", *triangle))

    for vertex_index, vertex in enumerate(mesh.vertices):
        packed = _pack_position(vertex, vertex_index)
        vertex_io.write(packed)

        # Bounds must match the stored float32 values, not the float64 input.
        for tracker, x in zip(axis_minmax, struct.unpack("<fff", packed)):
            tracker.add(x)

    triangle_data = triangle_io.getvalue()
    vertex_data = vertex_io.getvalue()

    accessors: List[pygltflib.Accessor] = [
        pygltflib.Accessor(
            bufferView=0,
            componentType=pygltflib.UNSIGNED_INT,
            count=len(triangles) * 3,
            type=pygltflib.SCALAR,
            max=[index_minmax.max],
            min=[index_minmax.min],
        ),
        pygltflib.Accessor(
            bufferView=1,
            componentType=pygltflib.FLOAT,
            count=vertex_count,
            type=pygltflib.VEC3,
            max=[tracker.max for tracker in axis_minmax],
            min=[tracker.min for tracker in axis_minmax],
        ),
    ]

    gltf = pygltflib.GLTF2(
        scene=0,
        scenes=[pygltflib.Scene(nodes=[0])],
        nodes=[pygltflib.Node(mesh=0, name=name)],
        meshes=[
            pygltflib.Mesh(
                name=name,
                primitives=[
                    pygltflib.Primitive(
                        attributes=pygltflib.Attributes(POSITION=1),
                        indices=0,
                    )
                ],
            )
        ],
        accessors=accessors,
        bufferViews=[
            pygltflib.BufferView(
                buffer=0,
                byteOffset=0,
                byteLength=len(triangle_data),
                target=pygltflib.ELEMENT_ARRAY_BUFFER,
            ),
            pygltflib.BufferView(
                buffer=0,
                byteOffset=len(triangle_data),
                byteLength=len(vertex_data),
                target=pygltflib.ARRAY_BUFFER,
            ),
        ],
        buffers=[
            pygltflib.Buffer(byteLength=len(triangle_data) + len(vertex_data))
        ],
    )

    gltf.set_binary_blob(triangle_data + vertex_data)

    return gltf


def mesh_to_glb_bytes(mesh: Mesh, name: str = "mesh") -> bytes:
    return b"".join(mesh_to_gltf(mesh, name=name).save_to_bytes())
