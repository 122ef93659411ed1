"""CSR graphs, readers, builder, reordering, slicing and PageRank/components kernels."""

__version__ = "0.1.0"

__all__ = [
    "bitmap",
    "builder",
    "components",
    "graph",
    "pagerank",
    "reader",
    "reorder",
    "rereference",
    "slicing",
    "sliding_queue",
    "util",
]