"""Packaged data files: equipment catalog and default engineering parameters."""
