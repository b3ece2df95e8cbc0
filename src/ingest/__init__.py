"""Raw record ingestion.

This package reads scraped field collections from record files.
It hands raw records to the store layer for normalization.
"""
