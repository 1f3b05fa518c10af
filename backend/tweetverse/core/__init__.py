"""
Pure transformation layer: parsing, date-range filtering, word frequency and
sentiment aggregation.
"""
