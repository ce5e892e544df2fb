"""Static analysis of TSX component files: exports, props and story values."""
