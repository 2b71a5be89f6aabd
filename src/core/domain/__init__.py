"""Domain models and value types.

Pure data structures (Pydantic v2 models and enums). The domain does not know
about files, formats or the console.
"""
