"""
Plumb: a content-addressable object store.

Objects are framed with a type/length header, hashed, compressed and
stored under a path derived from their content hash.
"""

__version__ = "0.1.0"
