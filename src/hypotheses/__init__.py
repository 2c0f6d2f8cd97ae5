"""Segmentation hypothesis generation for multi-hypothesis tracking.

Import from submodules directly (``src.hypotheses.generator`` for the entry
point, ``src.hypotheses.union_find`` for the disjoint-set engine); there are
no package-level re-exports.
"""

__all__: list[str] = []
