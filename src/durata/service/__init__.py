"""HTTP surface for the duration annotator."""
