# gapgraph

Graph-analytics building blocks for benchmarking: compressed sparse row
(CSR) graphs, edge-list readers, a graph builder, vertex reordering, graph
slicing, rereference matrices, and the PageRank and connected-components
kernels that run on top of them. Everything is plain Python with no
dependencies outside the standard library.

## Modules

| Module | Contents |
| --- | --- |
| `gapgraph.graph` | `CSRGraph`, `NodeWeight`, `EdgePair` |
| `gapgraph.reader` | `read_el`, `read_wel`, `read_gr`, `read_metis`, `read_mtx`, `read_edge_list`, `read_serialized_graph`, `file_suffix`, `GraphFormatError` |
| `gapgraph.builder` | `Builder`, `prefix_sum`, `squish_csr`, `squish_graph`, `relabel_by_degree` |
| `gapgraph.reorder` | `deg_sort`, `rand_order` |
| `gapgraph.slicing` | `graph_slicer`, `quantize_graph` |
| `gapgraph.rereference` | `make_offset_matrix` |
| `gapgraph.pagerank` | `page_rank_pull`, `pr_verifier`, `top_scores`, `epoch_ranges`, `PageRankResult` |
| `gapgraph.components` | `shiloach_vishkin`, `comp_stats`, `cc_verifier`, `ComponentsResult` |
| `gapgraph.bitmap` | `Bitmap` |
| `gapgraph.sliding_queue` | `SlidingQueue`, `QueueBuffer` |
| `gapgraph.util` | `top_k`, `SourcePicker`, `format_label`, `format_time`, `format_step` |

## Reading files

`read_edge_list(filename)` picks a reader from the file name's suffix and
returns the edges together with a flag saying whether they carry weights:

- `.el`: whitespace-separated `u v` pairs
- `.wel`: `u v w` triples
- `.gr`: DIMACS arc lines `a u v w`; other lines are ignored
- `.graph`: METIS adjacency lists, renumbered from 1..N to 0..N-1
- `.mtx`: Matrix Market coordinate files, renumbered from 1..N to 0..N-1,
  with weights truncated to integers; symmetric matrices yield both
  directions

`read_serialized_graph(filename)` reads a binary `.sg` (unweighted) or
`.wsg` (weighted) CSR graph directly. A malformed or unsupported file raises
`GraphFormatError`.

## Building a graph

A `Builder` turns an edge list into a `CSRGraph`. With `symmetrize=True`
every edge is stored in both directions and the result is undirected;
otherwise the result is directed and keeps both its out- and in-edges.
Weights on input edges are dropped.

```python
from gapgraph.builder import Builder

builder = Builder(symmetrize=True)
graph = builder.make_graph("roads.el")
print(graph.stats_line())
```

For edge-list files `make_graph` also removes self-loops and duplicate
edges and sorts every neighbourhood (`squish_graph`). A `.sg` file is
returned as stored; a `.wsg` file is refused with `GraphFormatError`, since
the builder only makes unweighted graphs. `make_graph_from_edges` builds
from an in-memory list of `EdgePair`s without squishing.

## Running the kernels

```python
from gapgraph.pagerank import page_rank_pull, top_scores
from gapgraph.components import shiloach_vishkin, comp_stats

pr = page_rank_pull(graph, 20, 1e-4, 256)
print(pr.iterations, pr.error, top_scores(graph, pr.scores))

cc = shiloach_vishkin(graph, 256)
print(comp_stats(cc.comp))
```

`page_rank_pull` runs pull-direction PageRank (damping 0.85) from uniform
scores, stopping after `max_iters` iterations or once the summed change
falls below `epsilon`. `shiloach_vishkin` labels each vertex with the lowest
vertex id of its component. The optional last argument is a number of
epochs: vertices are visited in that many consecutive ranges
(`epoch_ranges`); the results do not change. `pr_verifier` and
`cc_verifier` check results independently.

## Reordering, slicing and rereference matrices

- `deg_sort(graph, ...)` renumbers vertices by decreasing degree and
  returns the new graph with the `new_ids` mapping.
- `rand_order(graph, ..., seed=...)` renumbers by a seeded random
  permutation, so the same seed always gives the same graph.
- `graph_slicer(graph, start_id, stop_id, ...)` keeps only edges whose
  neighbour id lies in `[start_id, stop_id)`.
- `quantize_graph(graph, num_tiles)` replaces each out-neighbourhood by the
  sorted set of tiles its neighbours fall in.
- `make_offset_matrix(graph, num_vtx_per_line, 256, traverse_csr)` builds
  the epoch-major byte matrix recording, per cache line of vertices and per
  epoch of neighbour ids, where the line is last referenced or how many
  epochs until its next reference. Only 256 epochs are supported; neighbour
  ids are split into epochs the same way `epoch_ranges` splits vertices.

## What the package does not do

- It has no command-line program; everything is used as a library.
- It does not generate synthetic graphs; graphs come from files or from
  edge lists you supply.
- It cannot write graphs back out, serialized or otherwise.
- The kernels run serially in a single thread.