"""Feature modules: audio metadata and byte-range streaming."""
