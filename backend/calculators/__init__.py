"""
Deterministic area and paint-volume calculation.

Pure Python math. Given rooms, openings and paint settings (wire-format
dicts), produce the area breakdown and the paint to buy.
"""
