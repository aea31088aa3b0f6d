"""
Data access layer.

One repository per record kind, all built on ``BaseRepository``.
"""
