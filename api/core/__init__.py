"""
Shared, cross-cutting code for the API.

`core/` contains small building blocks that features use (settings, DB
wiring, logging, error handlers). Keep feature-specific SQL and validation
in the corresponding feature package (e.g. `names/`).
"""
