"""
Annotator bridge core package.

This package bridges callers that index text in UTF-16 code units to a
native annotation engine that indexes text in codepoints. It exposes
dataclasses for spans, options and results, the index-space converter,
a generation-checked handle registry for engine instances, and a boundary
facade that marshals options and results without ever raising.
"""
