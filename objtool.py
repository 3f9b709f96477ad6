#!/usr/bin/env python3

import logging
import sys
from pathlib import Path

import click

from wfobj import Mesh, ObjParseError, ParseMode, mesh_to_glb_bytes, \
    parse_obj_bytes, write_obj


def _mode(strict: bool) -> ParseMode:
    return ParseMode.STRICT if strict else ParseMode.LENIENT


def _read_mesh(path: Path, strict: bool) -> Mesh:
    return parse_obj_bytes(path.read_bytes(), mode=_mode(strict))


def _print_diagnostics(path: Path, error: ObjParseError):
    for diagnostic in error.diagnostics:
        print(f"{path}:{diagnostic.line_number}: {diagnostic.message}")


@click.group()
@click.option("--verbose", is_flag=True, help="Log every dropped line.")
def cli(verbose: bool):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option("--strict", is_flag=True)
def info(paths, strict: bool):
    """
    Print what each OBJ file contains.
    """

    for path in paths:
        path = Path(path)

        try:
            mesh = _read_mesh(path, strict)
        except ObjParseError as e:
            _print_diagnostics(path, e)
            sys.exit(1)

        print("--------------------------")
        print(f"  {path}")
        print(f"  verts={len(mesh.vertices)}, faces={len(mesh.faces)}, tris={len(mesh.triangles)}")
        print(
            f"  texture verts={len(mesh.texture_vertices or [])},"
            f" normals={len(mesh.normals or [])}"
        )
        print(
            f"  objects={len(mesh.objects or [])}, groups={len(mesh.groups or [])},"
            f" materials={len(mesh.materials or [])},"
            f" smoothing groups={len(mesh.smoothing_groups or [])}"
        )


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, dir_okay=False))
def check(paths):
    """
    Parse each file in strict mode and report every malformed line.
    """

    failed = 0

    for path in paths:
        path = Path(path)

        try:
            _read_mesh(path, strict=True)
        except ObjParseError as e:
            _print_diagnostics(path, e)
            failed += 1

    print(f"{len(paths) - failed} of {len(paths)} files OK.")

    if failed:
        sys.exit(1)


@cli.command()
@click.argument("src", type=click.Path(exists=True, dir_okay=False))
@click.argument("dst", type=click.Path(dir_okay=False))
@click.option("--strict", is_flag=True)
def normalize(src: str, dst: str, strict: bool):
    """
    Rewrite SRC into DST with the directives in canonical order.
    """

    src = Path(src)

    try:
        mesh = _read_mesh(src, strict)
    except ObjParseError as e:
        _print_diagnostics(src, e)
        sys.exit(1)

    Path(dst).write_text(write_obj(mesh))

    print(f"Wrote {len(mesh.vertices)} vertices and {len(mesh.faces)} faces to {dst}")


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option("--out-dir", default="gltf", type=click.Path(file_okay=False))
@click.option("--strict", is_flag=True)
def convert_gltf(paths, out_dir: str, strict: bool):
    """
    Convert the triangles of each OBJ file into a binary glTF (.glb).
    """

    for path in paths:
        path = Path(path)

        try:
            mesh = _read_mesh(path, strict)
        except ObjParseError as e:
            _print_diagnostics(path, e)
            continue

        if not mesh.triangles:
            print(f"Skipping {path}: no triangles.")
            continue

        outpath = Path(out_dir, f"{path.stem}.glb")
        outpath.parent.mkdir(parents=True, exist_ok=True)

        try:
            outpath.write_bytes(mesh_to_glb_bytes(mesh, name=path.stem))
        except ValueError as e:
            print(f"Skipping {path}: {e}")
            continue

        print(f"Writing to {outpath}")


if __name__ == "__main__":
    cli()
