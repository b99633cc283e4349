"""Application layer: argument normalisation, context merging, and ports."""
