"""Flat-file storage layer.

This package encodes normalized records into one text file per record.
It answers approximate regex queries by scanning stored files.
"""
