"""
Configuration, schema, models and mapping rules shared by ingest and reporting.
"""
