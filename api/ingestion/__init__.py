"""
ClinVar variant_summary ingestion: stream, classify, conflict-skip insert.

Run with `python -m ingestion [PATH]`.
"""
