from pathlib import Path

from click.testing import CliRunner

from objtool import cli


CUBE_FACE = """o cube
v 0 0 0
v 1 0 0
v 0 1 0
v 1 1 0
g front
f 1 2 4 3
f 1 2 3
"""


def _write(tmp_path: Path, name: str, text: str) -> str:
    path = tmp_path / name
    path.write_text(text)

    return str(path)


def test_info(tmp_path):
    path = _write(tmp_path, "cube.obj", CUBE_FACE)

    result = CliRunner().invoke(cli, ["info", path])

    assert result.exit_code == 0
    assert "verts=4, faces=2, tris=1" in result.output
    assert "objects=1, groups=1" in result.output


def test_check(tmp_path):
    good = _write(tmp_path, "good.obj", CUBE_FACE)
    bad = _write(tmp_path, "bad.obj", "v 0 0 0\nv 1 0\n")

    result = CliRunner().invoke(cli, ["check", good, bad])

    assert result.exit_code == 1
    assert f"{bad}:2: v expects 3 coordinates, got 2" in result.output
    assert "1 of 2 files OK." in result.output


def test_normalize(tmp_path):
    src = _write(tmp_path, "src.obj", "f 1 2 3\ng a\nv 1.000 0.000 0.000\n")
    dst = tmp_path / "dst.obj"

    result = CliRunner().invoke(cli, ["normalize", src, str(dst)])

    assert result.exit_code == 0
    assert dst.read_text() == "v 1 0 0\ng a\nf 1 2 3\n"


def test_normalize_strict_failure(tmp_path):
    src = _write(tmp_path, "src.obj", "v 1 0\n")
    dst = tmp_path / "dst.obj"

    result = CliRunner().invoke(cli, ["normalize", "--strict", src, str(dst)])

    assert result.exit_code == 1
    assert not dst.exists()


def test_convert_gltf(tmp_path):
    path = _write(tmp_path, "cube.obj", CUBE_FACE)
    flat = _write(tmp_path, "flat.obj", "v 0 0 0\n")
    out_dir = tmp_path / "out"

    result = CliRunner().invoke(cli, ["convert-gltf", path, flat, "--out-dir", str(out_dir)])

    assert result.exit_code == 0
    assert (out_dir / "cube.glb").read_bytes()[:4] == b"glTF"
    assert not (out_dir / "flat.glb").exists()
    assert "Skipping" in result.output


def test_convert_gltf_out_of_range_position(tmp_path):
    path = _write(tmp_path, "huge.obj", "v 1e300 0 0\nv 0 1 0\nv 0 0 1\nf 1 2 3\n")
    out_dir = tmp_path / "out"

    result = CliRunner().invoke(cli, ["convert-gltf", path, "--out-dir", str(out_dir)])

    assert result.exit_code == 0
    assert result.exception is None
    assert "Skipping" in result.output
    assert not (out_dir / "huge.glb").exists()
