"""SVG path-data parser.

Tokenizes the path mini-language (M L H V C S Q T A Z, absolute and relative)
to validate it, then hands each subpath to svgpathtools and normalizes the
resulting primitives to cubic Bezier segments.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from svgpathtools import Arc, CubicBezier, Line, QuadraticBezier, parse_path

from pathmorph.models.geometry import CubicSegment, PathDocument, Point, Subpath
from pathmorph.utils.bezier import arc_to_cubics, line_to_cubic, quad_to_cubic

logger = logging.getLogger(__name__)

# Numbers consumed per repetition of each command
COMMAND_ARITY: dict[str, int] = {
    "M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "S": 4, "Q": 4, "T": 2, "A": 7, "Z": 0,
}

_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_SEPARATORS = " \t\r\n\f,"
# Arc arguments 3 and 4 are single-character flags, possibly written without separators
_ARC_FLAG_SLOTS = (3, 4)


class PathParseError(ValueError):
    """Malformed path data: unknown command, bad number or missing arguments."""

    def __init__(self, message: str, path_data: str, position: int) -> None:
        super().__init__(f"{message} at position {position}")
        self.path_data = path_data
        self.position = position


@dataclass(frozen=True)
class PathCommand:
    letter: str
    args: tuple[float, ...]
    position: int

    @property
    def is_relative(self) -> bool:
        return self.letter.islower()

    @property
    def upper(self) -> str:
        return self.letter.upper()


def iter_commands(path_data: str) -> Iterator[PathCommand]:
    """Yield each command letter with its validated numeric arguments."""
    letter: str | None = None
    start = 0
    args: list[float] = []
    i = 0
    n = len(path_data)

    def finish() -> PathCommand:
        arity = COMMAND_ARITY[letter.upper()]
        if arity == 0:
            if args:
                raise PathParseError(f"'{letter}' takes no arguments", path_data, start)
        elif not args or len(args) % arity:
            raise PathParseError(
                f"'{letter}' expects a multiple of {arity} numbers, got {len(args)}",
                path_data,
                start,
            )
        return PathCommand(letter, tuple(args), start)

    while i < n:
        ch = path_data[i]
        if ch in _SEPARATORS:
            i += 1
            continue

        if ch.upper() in COMMAND_ARITY:
            if letter is not None:
                yield finish()
            letter = ch
            start = i
            args = []
            i += 1
            continue

        if letter is None:
            raise PathParseError(f"Unexpected {ch!r} before any command", path_data, i)

        if letter.upper() == "A" and len(args) % 7 in _ARC_FLAG_SLOTS:
            if ch not in "01":
                raise PathParseError(f"Invalid arc flag {ch!r}", path_data, i)
            args.append(float(ch))
            i += 1
            continue

        match = _NUMBER_RE.match(path_data, i)
        if match is None:
            raise PathParseError(f"Unexpected {ch!r}", path_data, i)
        args.append(float(match.group(0)))
        i = match.end()

    if letter is not None:
        yield finish()


def _split_subpaths(commands: list[PathCommand]) -> Iterator[list[PathCommand]]:
    """Group commands into subpaths: each move starts one, each close ends one."""
    chunk: list[PathCommand] = []
    for cmd in commands:
        if cmd.upper == "M" and chunk:
            yield chunk
            chunk = []
        chunk.append(cmd)
        if cmd.upper == "Z":
            yield chunk
            chunk = []
    if chunk:
        yield chunk


def _format_arg(value: float) -> str:
    # Integral values (arc flags included) are written without a fraction
    return str(int(value)) if value.is_integer() and abs(value) < 1e15 else repr(value)


def _chunk_text(chunk: list[PathCommand], current: complex) -> str:
    parts = []
    # Drawing after a close continues from the subpath start
    if chunk[0].upper != "M":
        parts.append(f"M {_format_arg(current.real)} {_format_arg(current.imag)}")
    for cmd in chunk:
        parts.append(cmd.letter)
        parts.extend(_format_arg(v) for v in cmd.args)
    return " ".join(parts)


def _move_target(cmd: PathCommand, current: complex) -> complex:
    if cmd.upper != "M":
        return current
    target = complex(cmd.args[0], cmd.args[1])
    return current + target if cmd.is_relative else target


def _point(z: complex) -> Point:
    return (z.real, z.imag)


def _to_cubics(seg) -> list[CubicSegment]:
    start = _point(seg.start)
    end = _point(seg.end)
    if isinstance(seg, Line):
        return [line_to_cubic(start, end)]
    if isinstance(seg, QuadraticBezier):
        return [quad_to_cubic(start, _point(seg.control), end)]
    if isinstance(seg, CubicBezier):
        return [CubicSegment(start, _point(seg.control1), _point(seg.control2), end)]
    if isinstance(seg, Arc):
        return arc_to_cubics(
            start, seg.radius.real, seg.radius.imag, seg.rotation, seg.large_arc, seg.sweep, end
        )
    raise TypeError(f"Unsupported segment type {type(seg).__name__}")


def parse_path_data(path_data: str) -> PathDocument:
    """Parse path data into cubic subpaths.

    Commands are validated by ``iter_commands`` and each subpath is handed to
    svgpathtools; its lines, quadratics and arcs are then elevated to cubics.
    Raises PathParseError on malformed input. An empty string gives an empty
    document.
    """
    commands = list(iter_commands(path_data))

    subpaths: list[Subpath] = []
    current = 0j
    for chunk in _split_subpaths(commands):
        try:
            path = parse_path(_chunk_text(chunk, current), current_pos=current)
        except Exception as e:
            raise PathParseError(f"Invalid subpath ({e})", path_data, chunk[0].position) from e

        if len(path):
            subpaths.append(tuple(cubic for seg in path for cubic in _to_cubics(seg)))
            current = path[-1].end
        else:
            current = _move_target(chunk[0], current)

    document = tuple(subpaths)
    logger.debug(
        "Parsed path: %d subpaths, %d segments",
        len(document),
        sum(len(sp) for sp in document),
    )
    return document
