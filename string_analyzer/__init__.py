"""String analyzer service.

Stores unique strings with derived properties and answers structured or natural-language filter
queries against them.
"""
