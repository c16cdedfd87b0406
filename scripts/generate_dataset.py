"""
Sample Order-Lines Generator
Writes a reproducible, already-clean fact table to data/orders.csv so the
reports and the API can run without the external retail dataset.
"""

import argparse
from datetime import date
from pathlib import Path

import numpy as np
import polars as pl
from faker import Faker

fake = Faker("en_US")
Faker.seed(42)
rng = np.random.default_rng(42)

OUTPUT_PATH = Path(__file__).parent.parent / "data" / "orders.csv"

CATEGORIES = {
    "Furniture": ["Bookcases", "Chairs", "Furnishings", "Tables"],
    "Office Supplies": ["Appliances", "Art", "Binders", "Envelopes", "Fasteners", "Labels", "Paper", "Storage", "Supplies"],
    "Technology": ["Accessories", "Copiers", "Machines", "Phones"],
}
REGIONS = ["Central", "East", "South", "West"]
SHIP_MODES = ["First Class", "Same Day", "Second Class", "Standard Class"]
SEGMENTS = ["Consumer", "Corporate", "Home Office"]

# Seasonality: Q4 sells the most, February the least
MONTH_WEIGHTS = np.array([0.07, 0.05, 0.08, 0.07, 0.08, 0.08, 0.08, 0.08, 0.10, 0.09, 0.11, 0.11])


def generate_products(per_sub_category: int = 40) -> pl.DataFrame:
    """Product catalog with a list price per product"""
    rows = []
    for category, sub_categories in CATEGORIES.items():
        prefix = category[:3].upper()
        for sub_category in sub_categories:
            for i in range(per_sub_category):
                rows.append({
                    "category": category,
                    "sub_category": sub_category,
                    "product_id": f"{prefix}-{sub_category[:2].upper()}-{10000000 + len(rows)}",
                    "list_price": round(float(rng.uniform(5, 2000)), 2),
                })
    return pl.DataFrame(rows)


def generate_order_lines(n_orders: int = 5000, start_year: int = 2022, years: int = 2) -> pl.DataFrame:
    """Order lines across `years` calendar years starting at `start_year`"""
    print(f"📊 Generating {n_orders:,} orders...")

    products = generate_products()
    cities = [(fake.city(), fake.state(), fake.zipcode()) for _ in range(200)]

    lines_per_order = rng.integers(1, 5, n_orders)
    n_lines = int(lines_per_order.sum())

    order_ids = np.repeat(np.arange(1, n_orders + 1), lines_per_order)
    order_years = np.repeat(rng.integers(start_year, start_year + years, n_orders), lines_per_order)
    order_months = np.repeat(rng.choice(np.arange(1, 13), n_orders, p=MONTH_WEIGHTS), lines_per_order)
    order_days = np.repeat(rng.integers(1, 29, n_orders), lines_per_order)
    locations = np.repeat(rng.integers(0, len(cities), n_orders), lines_per_order)
    regions = np.repeat(rng.choice(REGIONS, n_orders), lines_per_order)
    ship_modes = np.repeat(rng.choice(SHIP_MODES, n_orders), lines_per_order)
    segments = np.repeat(rng.choice(SEGMENTS, n_orders), lines_per_order)

    picks = rng.integers(0, len(products), n_lines)
    list_prices = products["list_price"].to_numpy()[picks]
    quantities = rng.integers(1, 10, n_lines)
    discount_pct = rng.choice([0.0, 0.02, 0.03, 0.05], n_lines)
    margins = rng.normal(0.08, 0.12, n_lines)

    discounts = np.round(list_prices * discount_pct, 2)
    sale_prices = np.round(list_prices - discounts, 2)
    profits = np.round(sale_prices * margins, 2)

    df = pl.DataFrame({
        "order_id": order_ids.tolist(),
        "order_date": [
            date(int(y), int(m), int(d)) for y, m, d in zip(order_years, order_months, order_days)
        ],
        "ship_mode": ship_modes.tolist(),
        "segment": segments.tolist(),
        "country": ["United States"] * n_lines,
        "city": [cities[i][0] for i in locations],
        "state": [cities[i][1] for i in locations],
        "postal_code": [cities[i][2] for i in locations],
        "region": regions.tolist(),
        "category": products["category"].to_numpy()[picks].tolist(),
        "sub_category": products["sub_category"].to_numpy()[picks].tolist(),
        "product_id": products["product_id"].to_numpy()[picks].tolist(),
        "quantity": quantities.tolist(),
        # Fixed two-place text keeps amounts exact in the CSV
        "discount": [f"{v:.2f}" for v in discounts],
        "sale_price": [f"{v:.2f}" for v in sale_prices],
        "profit": [f"{v:.2f}" for v in profits],
    })

    print(f"   ✅ {n_lines:,} order lines")
    return df


def main():
    parser = argparse.ArgumentParser(description="Generate a sample order-lines fact table")
    parser.add_argument("--orders", type=int, default=5000, help="Number of orders (default: 5000)")
    parser.add_argument("--start-year", type=int, default=2022, help="First order year (default: 2022)")
    parser.add_argument("--years", type=int, default=2, help="Number of years (default: 2)")
    parser.add_argument("--output", type=Path, default=OUTPUT_PATH, help="Output CSV path")
    args = parser.parse_args()

    print("=" * 60)
    print("🛒 Sample Order-Lines Generator")
    print("=" * 60 + "\n")

    df = generate_order_lines(args.orders, args.start_year, args.years)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    df.write_csv(args.output)

    size = args.output.stat().st_size / 1024 / 1024
    print(f"\n📄 {args.output}: {len(df):,} rows ({size:.2f} MB)")


if __name__ == "__main__":
    main()
