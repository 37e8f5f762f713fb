"""Core pipeline: schemas, loading, references, routes and feed."""
