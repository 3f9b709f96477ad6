"""
Wavefront OBJ reader.

Only the directives v, vt, vn, f, o, g, usemtl and s are understood;
every other line (comments, mtllib, blank lines...) is skipped.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, List, Optional, Union

from .mesh import Face, Mesh
from .util import decode_utf8, parse_float, parse_float_strict, parse_int, \
    parse_int_strict

logger = logging.getLogger(__name__)

# Directive keyword -> handler method name.
_DIRECTIVES = {
    "v": "_parse_vertex",
    "vt": "_parse_texture_vertex",
    "vn": "_parse_normal",
    "f": "_parse_face",
    "o": "_parse_object",
    "g": "_parse_group",
    "usemtl": "_parse_material",
    "s": "_parse_smoothing_group",
}


class ParseMode(IntEnum):
    # Skip malformed lines and keep NaN for unreadable numbers.
    LENIENT = 0
    # Report every malformed line and raise once the input has been read.
    STRICT = 1


@dataclass
class Diagnostic:
    line_number: int
    line: str
    message: str

    def __str__(self) -> str:
        return f"{self.line_number}: {self.message}"


class ObjParseError(ValueError):
    def __init__(self, diagnostics: List[Diagnostic]):
        self.diagnostics = list(diagnostics)

        first = self.diagnostics[0]

        super().__init__(
            f"{len(self.diagnostics)} malformed line(s), first at line "
            f"{first.line_number}: {first.message}"
        )


class _MalformedLine(Exception):
    pass


class ObjParser:
    """
    Reads OBJ text into a Mesh. An instance holds the diagnostics of the
    last call to `parse`.
    """

    def __init__(self, mode: ParseMode = ParseMode.LENIENT):
        self.mode = ParseMode(mode)
        self.diagnostics: List[Diagnostic] = []

        self._mesh: Optional[Mesh] = None

    @property
    def strict(self) -> bool:
        return self.mode is ParseMode.STRICT

    def parse(self, text: str) -> Mesh:
        self.diagnostics = []
        mesh = self._mesh = Mesh()

        for line_number, line in enumerate(text.split("\n"), start=1):
            line = line.strip()

            # The directive must be followed by a space: "v\t1 2 3" and a
            # bare "v" are not vertex lines.
            directive, separator, rest = line.partition(" ")

            if not separator or directive not in _DIRECTIVES:
                continue

            try:
                getattr(self, _DIRECTIVES[directive])(rest.split())
            except _MalformedLine as e:
                self._reject(line_number, line, str(e))

        self._mesh = None

        return mesh

    def _reject(self, line_number: int, line: str, message: str):
        logger.debug("Dropping line %d (%s): %r", line_number, message, line)

        if self.strict:
            self.diagnostics.append(
                Diagnostic(line_number=line_number, line=line, message=message)
            )

    def _numbers(self, tokens: List[str]) -> List[float]:
        if not self.strict:
            return [parse_float(token) for token in tokens]

        values = []

        for token in tokens:
            value = parse_float_strict(token)

            if value is None:
                raise _MalformedLine(f"not a number: {token!r}")

            values.append(value)

        return values

    def _index(self, token: str):
        """
        Converts one 1-based index token to its 0-based value. An empty token
        means the slot is absent and gives None.
        """

        if not token:
            return None

        if self.strict:
            value = parse_int_strict(token)

            if value is None:
                raise _MalformedLine(f"not an index: {token!r}")

            return value - 1

        # NaN - 1 is still NaN.
        return parse_int(token) - 1

    def _parse_vertex(self, tokens: List[str]):
        values = self._numbers(tokens)

        if len(values) != 3:
            raise _MalformedLine(f"v expects 3 coordinates, got {len(values)}")

        self._mesh.vertices.append(tuple(values))

    def _parse_texture_vertex(self, tokens: List[str]):
        if self._mesh.texture_vertices is None:
            self._mesh.texture_vertices = []

        values = self._numbers(tokens)

        if len(values) < 2 or (self.strict and len(values) > 3):
            raise _MalformedLine(
                f"vt expects 2 or 3 coordinates, got {len(values)}"
            )

        self._mesh.texture_vertices.append(tuple(values))

    def _parse_normal(self, tokens: List[str]):
        if self._mesh.normals is None:
            self._mesh.normals = []

        values = self._numbers(tokens)

        if len(values) != 3:
            raise _MalformedLine(f"vn expects 3 components, got {len(values)}")

        self._mesh.normals.append(tuple(values))

    def _parse_face(self, tokens: List[str]):
        vertices = []
        textures = []
        normals = []

        for token in tokens:
            slots = token.split("/")

            if self.strict and len(slots) > 3:
                raise _MalformedLine(f"too many indices in {token!r}")

            slots += [""] * (3 - len(slots))

            vertex, texture, normal = (self._index(slot) for slot in slots[:3])

            if vertex is None:
                if self.strict:
                    raise _MalformedLine(f"missing vertex index in {token!r}")

                continue

            vertices.append(vertex)
            textures.append(texture)
            normals.append(normal)

        if not vertices:
            raise _MalformedLine("face has no vertex indices")

        if self.strict and len(vertices) < 3:
            raise _MalformedLine(
                f"face needs at least 3 vertices, got {len(vertices)}"
            )

        self._mesh.faces.append(
            Face(
                vertices=vertices,
                textures=textures if _any_present(textures) else None,
                normals=normals if _any_present(normals) else None,
            )
        )

    def _parse_object(self, tokens: List[str]):
        self._append_name("objects", tokens[0])

    def _parse_group(self, tokens: List[str]):
        self._append_name("groups", tokens[0])

    def _parse_material(self, tokens: List[str]):
        self._append_name("materials", tokens[0])

    def _parse_smoothing_group(self, tokens: List[str]):
        self._append_name("smoothing_groups", tokens[0])

    def _append_name(self, attribute: str, name: str):
        names = getattr(self._mesh, attribute)

        if names is None:
            names = []
            setattr(self._mesh, attribute, names)

        names.append(name)


def _any_present(slots: list) -> bool:
    return any(slot is not None for slot in slots)


def parse_obj_string(text: str, mode: ParseMode = ParseMode.LENIENT) -> Mesh:
    """
    Parse OBJ text into a Mesh.

    In lenient mode this never fails. In strict mode an ObjParseError
    listing every malformed line is raised after the whole text is read.
    """

    parser = ObjParser(mode)
    mesh = parser.parse(text)

    if parser.diagnostics:
        raise ObjParseError(parser.diagnostics)

    return mesh


def parse_obj_bytes(
    data: Union[bytes, bytearray, memoryview],
    mode: ParseMode = ParseMode.LENIENT,
    decode: Callable[[bytes], str] = decode_utf8,
) -> Mesh:
    return parse_obj_string(decode(data), mode=mode)


def parse_obj(
    data: Union[str, bytes, bytearray, memoryview],
    mode: ParseMode = ParseMode.LENIENT,
) -> Mesh:
    if isinstance(data, str):
        return parse_obj_string(data, mode=mode)

    return parse_obj_bytes(data, mode=mode)
