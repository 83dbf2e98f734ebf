"""Core technical-analysis logic: bars, indicators, rules and strategies.

This package contains pure domain logic with no I/O dependencies
(no files, database or network access). Bar ingestion and result
presentation belong to the caller; the replay and analysis layer lives
in ``tabacktest``.
"""
