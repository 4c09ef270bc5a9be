"""
Tag-reading adapters.
"""
from .tag_reader import MetadataReader, MetadataReadError, MutagenTagReader

__all__ = ["MetadataReader", "MetadataReadError", "MutagenTagReader"]
