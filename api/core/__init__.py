"""
Shared, cross-cutting code for the API and the ingestion pipeline.

`core/` holds the small building blocks both subsystems use (DB wiring,
settings, logging). Variant SQL and business logic stay in the feature
packages (`ingestion/`, `variants/`).
"""
