"""Wavefront OBJ/MTL ingestion.

Turns OBJ text into a tree of Groups holding Triangles, or SmoothTriangles
when the faces reference vertex normals. Supported statements:

* ``v x y z`` and ``vn x y z``
* ``f`` with ``v``, ``v/vt``, ``v/vt/vn`` or ``v//vn`` references; polygons
  with more than three vertices are fan-triangulated. Negative indices count
  back from the latest vertex.
* ``g name`` starts or resumes a named group.
* ``mtllib file...``, ``newmtl``, ``usemtl``, ``Kd``, ``Ka``, ``Ks``, ``Ns``.
  Ambient and specular colors are averaged into the scalar coefficients used
  by the Phong model; a black ``Ka`` is ignored.

Anything else is an ignored line. In lenient mode (the default) ignored
lines are counted and logged; in strict mode the first one raises
ObjParseError with its line number. Comments and blank lines are skipped
silently.

Large groups are split into chunks of ``max_group_size`` triangles, each in
its own sub-group, so that the group bounding boxes can prune most of a mesh.

Example:
    >>> from src.whitted.scene.obj_parser import parse_obj
    >>> parser = parse_obj('''
    ... v -1 1 0
    ... v -1 0 0
    ... v 1 0 0
    ... v 1 1 0
    ... f 1 2 3 4
    ... ''')
    >>> len(parser.default_group)
    2
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from src.whitted.core.errors import ObjParseError, ZeroVectorError
from src.whitted.core.tuples import EPSILON, Color, Point, Vector
from src.whitted.geometry.group import Group
from src.whitted.geometry.triangle import SmoothTriangle, Triangle
from src.whitted.materials.material import Material

logger = logging.getLogger(__name__)

DEFAULT_GROUP_NAME = "default"


class _BadStatement(Exception):
    """A statement that could not be used; handled per the parser mode."""


class _UnknownStatement(_BadStatement):
    """A statement this parser does not recognize."""


class ObjParser:
    """Incremental OBJ/MTL parser.

    Args:
        strict: Raise ObjParseError on the first bad line instead of skipping.
        max_group_size: Triangles a group holds before further faces go into
            a new sub-group.
        base_dir: Directory ``mtllib`` paths are resolved against. Defaults
            to the directory of the parsed file, or the working directory
            for parsed text.

    Attributes:
        vertices: Parsed vertices, in file order.
        normals: Parsed vertex normals, in file order.
        groups: Named groups, including the root ``"default"`` group.
        materials: Materials defined by ``newmtl``, by name.
        ignored_lines: Number of lines skipped in lenient mode.
    """

    def __init__(self, strict: bool = False, max_group_size: int = 8, base_dir: str | Path | None = None):
        if max_group_size < 1:
            raise ValueError(f"max_group_size must be at least 1, got {max_group_size}")
        self.strict = strict
        self.max_group_size = max_group_size
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self.vertices: list[Point] = []
        self.normals: list[Vector] = []
        self.default_group = Group(name=DEFAULT_GROUP_NAME)
        self.groups: dict[str, Group] = {DEFAULT_GROUP_NAME: self.default_group}
        self.materials: dict[str, Material] = {}
        self.ignored_lines = 0
        self._current_group = self.default_group
        # Group currently receiving faces for each named group.
        self._face_targets: dict[str, Group] = {}
        self._defining: Material | None = None
        self._using: Material | None = None

    # Entry points -------------------------------------------------------

    def parse_file(self, path: str | Path) -> ObjParser:
        """Parse an OBJ file from disk and return self."""
        path = Path(path)
        if self.base_dir is None:
            self.base_dir = path.parent
        text = path.read_text(encoding="utf-8")
        logger.debug("Parsing %s", path)
        self._parse_lines(text.splitlines(), str(path))
        return self

    def parse(self, text: str) -> ObjParser:
        """Parse OBJ text and return self."""
        self._parse_lines(text.splitlines(), "<string>")
        return self

    def to_group(self) -> Group:
        """The root group holding every parsed triangle."""
        return self.default_group

    def group(self, name: str) -> Group | None:
        return self.groups.get(name)

    # Line handling ------------------------------------------------------

    def _parse_lines(self, lines: Iterable[str], source: str) -> None:
        for number, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            try:
                self._parse_statement(line.split())
            except _BadStatement as exc:
                if self.strict:
                    raise ObjParseError(f"{source}: {exc}", number, raw) from None
                self.ignored_lines += 1
                level = logging.DEBUG if isinstance(exc, _UnknownStatement) else logging.WARNING
                logger.log(level, "%s:%d: ignoring line (%s)", source, number, exc)

    def _parse_statement(self, tokens: list[str]) -> None:
        keyword, args = tokens[0], tokens[1:]
        handler = self._HANDLERS.get(keyword)
        if handler is None:
            raise _UnknownStatement(f"unrecognized statement {keyword!r}")
        handler(self, args)

    # OBJ statements -----------------------------------------------------

    def _vertex(self, args: list[str]) -> None:
        self.vertices.append(Point(*_floats(args, 3, "v")))

    def _normal(self, args: list[str]) -> None:
        self.normals.append(Vector(*_floats(args, 3, "vn")))

    def _face(self, args: list[str]) -> None:
        if len(args) < 3:
            raise _BadStatement(f"face needs at least 3 vertices, got {len(args)}")
        points = []
        normals = []
        for ref in args:
            parts = ref.split("/")
            points.append(_lookup(self.vertices, parts[0], "vertex"))
            if len(parts) > 2 and parts[2]:
                normals.append(_lookup(self.normals, parts[2], "normal"))
        if normals and len(normals) != len(points):
            raise _BadStatement("face mixes vertices with and without normals")

        triangles = []
        try:
            for i in range(1, len(points) - 1):
                if normals:
                    triangle = SmoothTriangle(
                        points[0], points[i], points[i + 1], normals[0], normals[i], normals[i + 1]
                    )
                else:
                    triangle = Triangle(points[0], points[i], points[i + 1])
                triangle.material = self._using
                triangles.append(triangle)
        except ZeroVectorError:
            raise _BadStatement("degenerate face (collinear vertices)") from None
        self._add_triangles(triangles)

    def _add_triangles(self, triangles: list[Triangle]) -> None:
        group = self._current_group
        target = self._face_targets.get(group.name, group)
        for triangle in triangles:
            if len(target) >= self.max_group_size:
                target = Group()
                group.add(target)
            target.add(triangle)
        self._face_targets[group.name] = target

    def _group(self, args: list[str]) -> None:
        if not args:
            raise _BadStatement("group statement without a name")
        name = " ".join(args)
        group = self.groups.get(name)
        if group is None:
            group = Group(name=name)
            self.groups[name] = group
            self.default_group.add(group)
        self._current_group = group

    # MTL statements -----------------------------------------------------

    def _mtllib(self, args: list[str]) -> None:
        if not args:
            raise _BadStatement("mtllib without a file name")
        base = self.base_dir if self.base_dir is not None else Path.cwd()
        for name in args:
            path = base / name
            if not path.is_file():
                raise _BadStatement(f"material library not found: {path}")
            logger.debug("Loading material library %s", path)
            self._parse_lines(path.read_text(encoding="utf-8").splitlines(), str(path))

    def _newmtl(self, args: list[str]) -> None:
        if not args:
            raise _BadStatement("newmtl without a material name")
        name = args[0]
        material = Material(name=name)
        self.materials[name] = material
        self._defining = material

    def _usemtl(self, args: list[str]) -> None:
        if not args:
            raise _BadStatement("usemtl without a material name")
        material = self.materials.get(args[0])
        if material is None:
            self._using = None
            raise _BadStatement(f"unknown material {args[0]!r}")
        self._using = material

    def _material_being_defined(self, keyword: str) -> Material:
        if self._defining is None:
            raise _BadStatement(f"{keyword} outside of a newmtl block")
        return self._defining

    def _ambient(self, args: list[str]) -> None:
        r, g, b = _floats(args, 3, "Ka")
        if r + g + b <= EPSILON:
            # A black ambient would leave unlit areas pitch black.
            return
        self._material_being_defined("Ka").ambient = (r + g + b) / 3.0

    def _diffuse(self, args: list[str]) -> None:
        r, g, b = _floats(args, 3, "Kd")
        self._material_being_defined("Kd").color = Color(r, g, b)

    def _specular(self, args: list[str]) -> None:
        r, g, b = _floats(args, 3, "Ks")
        self._material_being_defined("Ks").specular = (r + g + b) / 3.0

    def _shininess(self, args: list[str]) -> None:
        (value,) = _floats(args, 1, "Ns")
        self._material_being_defined("Ns").shininess = value

    _HANDLERS = {
        "v": _vertex,
        "vn": _normal,
        "f": _face,
        "g": _group,
        "mtllib": _mtllib,
        "newmtl": _newmtl,
        "usemtl": _usemtl,
        "Ka": _ambient,
        "Kd": _diffuse,
        "Ks": _specular,
        "Ns": _shininess,
    }


def _floats(args: list[str], count: int, keyword: str) -> list[float]:
    if len(args) != count:
        raise _BadStatement(f"{keyword} expects {count} numbers, got {len(args)}")
    try:
        return [float(a) for a in args]
    except ValueError:
        raise _BadStatement(f"{keyword} has a non-numeric argument: {' '.join(args)}") from None


def _lookup(items: list, token: str, kind: str):
    try:
        index = int(token)
    except ValueError:
        raise _BadStatement(f"invalid {kind} index {token!r}") from None
    # OBJ indices are 1-based; negative ones are relative to the end.
    position = index - 1 if index > 0 else len(items) + index
    if index == 0 or not 0 <= position < len(items):
        raise _BadStatement(f"{kind} index {index} out of range (have {len(items)})")
    return items[position]


def parse_obj(text: str, strict: bool = False, **kwargs) -> ObjParser:
    """Parse OBJ text; see ObjParser for keyword arguments."""
    return ObjParser(strict=strict, **kwargs).parse(text)


def parse_obj_file(path: str | Path, strict: bool = False, **kwargs) -> ObjParser:
    """Parse an OBJ file; see ObjParser for keyword arguments."""
    return ObjParser(strict=strict, **kwargs).parse_file(path)


def parse_obj_directory(directory: str | Path, strict: bool = False, **kwargs) -> dict[str, Group]:
    """Parse every ``*.obj`` file in a directory.

    Returns:
        Root group of each file, keyed by file stem, in file name order.
    """
    result = {}
    for path in sorted(Path(directory).glob("*.obj")):
        result[path.stem] = parse_obj_file(path, strict=strict, **kwargs).to_group()
    return result
