"""
Static configuration tables: central bodies, reference element sets and
mission parameters.
"""
