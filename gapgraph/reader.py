"""Readers for edge-list files and serialized CSR graph files."""

from __future__ import annotations

import os
import re
import struct
from itertools import zip_longest
from pathlib import Path
from typing import IO, Callable, Iterable, Iterator, Union

from .graph import CSRGraph, EdgePair, NodeWeight

PathLike = Union[str, "os.PathLike[str]"]

_LEADING_INT = re.compile(r"[+-]?\d+")


class GraphFormatError(ValueError):
    """Raised when a graph file is malformed or of an unsupported kind."""


def file_suffix(filename: PathLike) -> str:
    """Return the part of ``filename`` from its last dot on."""
    name = os.fspath(filename)
    pos = name.rfind(".")
    if pos == -1:
        raise GraphFormatError(f"Couldn't find suffix of {name}")
    return name[pos:]


def _to_int(token: str) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise GraphFormatError(f"expected an integer, got {token!r}") from exc


def _int_groups(text: str, size: int) -> Iterator[tuple[int, ...]]:
    """Yield whole groups of integers until a token fails to parse."""
    tokens = iter(text.split())
    for group in zip(*[tokens] * size):
        try:
            yield tuple(int(t) for t in group)
        except ValueError:
            return


def read_el(stream: IO[str]) -> list[EdgePair]:
    """Read ``u v`` pairs of an unweighted edge list."""
    return [EdgePair(u, v) for u, v in _int_groups(stream.read(), 2)]


def read_wel(stream: IO[str]) -> list[EdgePair]:
    """Read ``u v w`` triples of a weighted edge list."""
    return [EdgePair(u, NodeWeight(v, w)) for u, v, w in _int_groups(stream.read(), 3)]


def read_gr(stream: IO[str]) -> list[EdgePair]:
    """Read the ``a u v w`` arc lines of a DIMACS graph, ignoring other lines."""
    edges = []
    for line in stream:
        if not line.startswith("a"):
            continue
        parts = line.split()
        if len(parts) < 4:
            raise GraphFormatError(f"malformed arc line: {line.rstrip()!r}")
        u, v, w = (_to_int(t) for t in parts[1:4])
        edges.append(EdgePair(u, NodeWeight(v, w)))
    return edges


def read_metis(stream: IO[str]) -> tuple[list[EdgePair], bool]:
    """Read a METIS adjacency file, renumbering vertices from 1..N to 0..N-1.

    Returns the edges and whether the file carried weights.
    """
    lines = iter(stream)
    header = None
    for line in lines:
        if line.startswith("%"):
            continue
        header = line.split()
        break
    if header is None or len(header) < 2:
        raise GraphFormatError("missing METIS header")
    num_nodes = _to_int(header[0])
    _to_int(header[1])
    read_weights = False
    if len(header) > 2:
        fmt = _to_int(header[2])
        if fmt == 1:
            read_weights = True
        elif fmt not in (0, 100):
            raise GraphFormatError(f"Do not support METIS fmt type: {fmt}")

    edges: list[EdgePair] = []
    u = 0
    for line in lines:
        if u >= num_nodes:
            break
        if line.startswith("%"):
            continue
        tokens = iter(line.split())
        if read_weights:
            for v, w in zip(tokens, tokens):
                edges.append(EdgePair(u, NodeWeight(_to_int(v) - 1, _to_int(w))))
        else:
            edges.extend(EdgePair(u, _to_int(v) - 1) for v in tokens)
        u += 1
    return edges, read_weights


def _mtx_weight(token: str) -> int:
    match = _LEADING_INT.match(token)
    if match is None:
        raise GraphFormatError(f"bad weight {token!r} in .mtx")
    return int(match.group())


def read_mtx(stream: IO[str]) -> tuple[list[EdgePair], bool]:
    """Read a Matrix Market coordinate file, renumbering from 1..N to 0..N-1.

    Weights are truncated to integers. Returns the edges and whether the
    file carried weights.
    """
    header = stream.readline().split()
    start, obj, fmt, field, symmetry = (header + [""] * 5)[:5]
    if start != "%%MatrixMarket":
        raise GraphFormatError(".mtx file did not start with %%MatrixMarket")
    if obj != "matrix" or fmt != "coordinate":
        raise GraphFormatError("only allow matrix coordinate format for .mtx")
    if field == "complex":
        raise GraphFormatError("do not support complex weights for .mtx")
    if field == "pattern":
        read_weights = False
    elif field in ("real", "double", "integer"):
        read_weights = True
    else:
        raise GraphFormatError("unrecognized field type for .mtx")
    if symmetry == "symmetric":
        undirected = True
    elif symmetry in ("general", "skew-symmetric"):
        undirected = False
    else:
        raise GraphFormatError("unsupported symmetry type for .mtx")

    size = None
    for line in stream:
        if line.startswith("%") or not line.strip():
            continue
        size = line.split()
        break
    if size is None or len(size) < 3:
        raise GraphFormatError("missing size line in .mtx")
    m, n, _ = (_to_int(t) for t in size[:3])
    if m != n:
        raise GraphFormatError(f"matrix must be square for .mtx ({m} x {n})")

    edges: list[EdgePair] = []
    needed = 3 if read_weights else 2
    for line in stream:
        parts = line.split()
        if not parts:
            continue
        if len(parts) < needed:
            raise GraphFormatError(f"malformed .mtx entry: {line.rstrip()!r}")
        u = _to_int(parts[0]) - 1
        v = _to_int(parts[1]) - 1
        if read_weights:
            w = _mtx_weight(parts[2])
            edges.append(EdgePair(u, NodeWeight(v, w)))
            if undirected:
                edges.append(EdgePair(v, NodeWeight(u, w)))
        else:
            edges.append(EdgePair(u, v))
            if undirected:
                edges.append(EdgePair(v, u))
    return edges, read_weights


def _always(weighted: bool, reader: Callable[[IO[str]], list[EdgePair]]):
    return lambda stream: (reader(stream), weighted)


_READERS = {
    ".el": _always(False, read_el),
    ".wel": _always(True, read_wel),
    ".gr": _always(True, read_gr),
    ".graph": read_metis,
    ".mtx": read_mtx,
}


def read_edge_list(filename: PathLike) -> tuple[list[EdgePair], bool]:
    """Read an edge-list file chosen by suffix; return edges and whether they are weighted."""
    suffix = file_suffix(filename)
    with open(filename, encoding="utf-8") as stream:
        reader = _READERS.get(suffix)
        if reader is None:
            raise GraphFormatError(f"Unrecognized suffix: {suffix}")
        return reader(stream)


def read_serialized_graph(filename: PathLike) -> CSRGraph:
    """Read a binary ``.sg`` (unweighted) or ``.wsg`` (weighted) CSR graph."""
    suffix = file_suffix(filename)
    if suffix not in (".sg", ".wsg"):
        raise GraphFormatError(f"not a serialized graph: {os.fspath(filename)}")
    weighted = suffix == ".wsg"
    data = Path(filename).read_bytes()
    pos = 0

    def take(fmt: str) -> tuple:
        nonlocal pos
        try:
            values = struct.unpack_from(fmt, data, pos)
        except struct.error as exc:
            raise GraphFormatError(
                f"truncated serialized graph {os.fspath(filename)}"
            ) from exc
        pos += struct.calcsize(fmt)
        return values

    directed, num_edges, num_nodes = take("<?qq")
    if num_nodes < 0 or num_edges < 0:
        raise GraphFormatError("negative size in serialized graph")

    def take_csr() -> tuple[list[int], list]:
        offsets = list(take(f"<{num_nodes + 1}q"))
        if weighted:
            flat = iter(take(f"<{2 * num_edges}i"))
            neighbors: list = [NodeWeight(v, w) for v, w in zip(flat, flat)]
        else:
            neighbors = list(take(f"<{num_edges}i"))
        return offsets, neighbors

    out_offsets, out_neighbors = take_csr()
    if directed:
        in_offsets, in_neighbors = take_csr()
        return CSRGraph(
            num_nodes, out_offsets, out_neighbors, in_offsets, in_neighbors, directed=True
        )
    return CSRGraph(num_nodes, out_offsets, out_neighbors, directed=False)