"""Console entrypoints for nnrm (npm) and nyrm (yarn)."""
