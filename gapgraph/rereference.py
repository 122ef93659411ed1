"""Compressed rereference matrix: per cache line and epoch, when the line is next used."""

from __future__ import annotations

from .graph import CSRGraph

SUPPORTED_EPOCHS = 256
MAX_REREF = 127
SWITCH_BIT = 0x80
VALUE_MASK = 0x7F


def _last_refs(
    graph: CSRGraph, num_vtx_per_line: int, num_epochs: int, epoch_size: int, traverse_csr: bool
) -> list[list[int]]:
    """Largest neighbor id seen per (cache line, epoch), or -1 if none."""
    neighbors_of = graph.out_neigh if traverse_csr else graph.in_neigh
    n = graph.num_nodes
    num_lines = (n + num_vtx_per_line - 1) // num_vtx_per_line
    rows = []
    for c in range(num_lines):
        row = [-1] * num_epochs
        for v in range(c * num_vtx_per_line, min((c + 1) * num_vtx_per_line, n)):
            for ngh in map(int, neighbors_of(v)):
                epoch = ngh // epoch_size
                row[epoch] = max(row[epoch], ngh)
        rows.append(row)
    return rows


def _compress(row: list[int], epoch_size: int) -> list[int]:
    """Encode one cache line's references, working back from the last epoch.

    A clear top bit marks a referenced epoch and holds the quantized position
    of the last reference in it; a set top bit holds the distance in epochs
    to the next referenced one, saturating at ``MAX_REREF``.
    """
    sub_epoch_size = (epoch_size + 127) // 128
    num_epochs = len(row)
    out = [0] * num_epochs
    last = num_epochs - 1
    out[last] = MAX_REREF if row[last] != -1 else MAX_REREF | SWITCH_BIT
    for e in range(num_epochs - 2, -1, -1):
        if row[e] != -1:
            quantized = (row[e] - e * epoch_size) // sub_epoch_size
            if quantized > MAX_REREF:
                raise ValueError("quantized rereference exceeds 7 bits")
            out[e] = quantized & VALUE_MASK
        elif out[e + 1] & SWITCH_BIT:
            next_ref = out[e + 1] & VALUE_MASK
            out[e] = (MAX_REREF if next_ref == MAX_REREF else next_ref + 1) | SWITCH_BIT
        else:
            out[e] = 1 | SWITCH_BIT
    return out


def make_offset_matrix(
    graph: CSRGraph,
    num_vtx_per_line: int,
    num_epochs: int = SUPPORTED_EPOCHS,
    traverse_csr: bool = True,
) -> bytes:
    """Build the rereference matrix, laid out epoch-major: entry ``e * lines + c``.

    Vertices are grouped ``num_vtx_per_line`` to a cache line and neighbor ids
    into ``num_epochs`` equal epochs. Out-neighbors are scanned when
    ``traverse_csr`` is true or the graph is undirected, in-neighbors otherwise.
    """
    if num_vtx_per_line <= 0:
        raise ValueError("num_vtx_per_line must be positive")
    if num_epochs != SUPPORTED_EPOCHS:
        raise ValueError(f"only {SUPPORTED_EPOCHS} epochs are supported")
    if not graph.directed:
        traverse_csr = True
    epoch_size = (graph.num_nodes + num_epochs - 1) // num_epochs
    rows = _last_refs(graph, num_vtx_per_line, num_epochs, epoch_size, traverse_csr)
    compressed = [_compress(row, epoch_size) for row in rows]
    num_lines = len(compressed)
    matrix = bytearray(num_lines * num_epochs)
    for c, line in enumerate(compressed):
        for e, value in enumerate(line):
            matrix[e * num_lines + c] = value
    return bytes(matrix)