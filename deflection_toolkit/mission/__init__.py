"""
Mission Analysis Package
Contains tools for deflection mission analysis, including:
- Impulsive deflection of a small body and the resulting period change
- Osculating element recovery from Cartesian states
- Baseline vs. deflected separation and close approach search
"""
