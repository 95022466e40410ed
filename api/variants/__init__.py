"""
Read-only variant API: paginated list, lookup by id, summary counts.
"""
