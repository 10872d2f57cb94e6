"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks that every feature uses (DB wiring,
settings, logging). Response shaping lives in `transformer/`; feature SQL and
transformers live in the feature package (e.g. `documents/`).
"""
