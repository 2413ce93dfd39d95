"""
Impulsive maneuvers applied to orbital states.
"""
