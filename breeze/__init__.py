"""
breeze: entity query translation and serialization member control.

Translates client entity queries (filter, sort, projection, paging and
expansion clauses) into SQLAlchemy statements, and decides which members of
server-side objects are serialized into a response.
"""

__version__ = "0.1.0"
