"""
Disaster Atlas
--------------
Continent and world choropleths of natural-disaster counts, with per-region
category filters and a per-year bar chart panel.
"""

__version__ = "0.1.0"
