"""
Retail Insights

Reporting layer over a retail order-lines fact table: top products, regional
top sellers, year-over-year monthly sales, seasonal peaks and sub-category
profit growth.
"""

__version__ = "1.0.0"
