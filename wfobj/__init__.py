from .util import decode_utf8, format_number, parse_float, parse_int
from .mesh import Mesh, Face
from .parser import ObjParser, ParseMode, Diagnostic, ObjParseError, \
    parse_obj, parse_obj_string, parse_obj_bytes
from .writer import write_obj, format_face
from .gltf import mesh_to_gltf, mesh_to_glb_bytes
