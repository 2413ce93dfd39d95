"""
Two-body dynamics: vectors, element/state containers and Keplerian propagation.
"""
