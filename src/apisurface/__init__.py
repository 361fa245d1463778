"""
apisurface: canonical public API reports

Turns an already-resolved declaration tree into a deterministic,
schema-validated API JSON document meant to be committed and diffed.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Parsing source code
    - Resolving types
    - Rendering documentation text
    - Diffing two reports

The declaration model is input only; generators never mutate it.
"""

__version__ = "0.1.0"
