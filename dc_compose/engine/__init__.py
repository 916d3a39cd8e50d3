"""Composition engine: path parsing, tree building, reconciliation, flattening."""
