"""Filter interpretation.

Both the structured query parameters and the natural-language sentence are converted into the same
strict `Predicate` object, which is then rendered into deterministic, parameterized SQL.
"""
