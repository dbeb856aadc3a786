#!/usr/bin/env python3
"""
Print the reconciled stock of a product.

Usage:
    python scripts/check_stock.py 10
    python scripts/check_stock.py 10 --size M --color 5 --qty 3
"""
import argparse
import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from backoffice.services.database import close_database, get_database_async


async def main(args: argparse.Namespace) -> int:
    db = await get_database_async()
    try:
        lookup = await db.stock_domain.lookup(args.product_id, args.size, resolve_color_names=True)
        if not lookup.ok:
            print(f"Error: {lookup.error}")
            return 1

        snapshot = lookup.snapshot
        print(f"Product {args.product_id}: {snapshot.total_quantity} unit(s)")
        for entry in snapshot.entries:
            color = entry.color_name or entry.color_id
            print(f"  {entry.size_code:>6s} | {str(color):20s} | {entry.qty}")
        if snapshot.orphaned_realizations:
            print(f"Orphaned realization lines: {snapshot.orphaned_realizations}")

        if args.qty:
            if not args.size:
                print("Error: --qty requires --size")
                return 1
            check = await db.check_availability(args.product_id, args.size, args.qty, args.color)
            print(f"\nAvailable: {check.available} ({check.available_qty}/{check.requested_qty})")
            if check.message:
                print(check.message)
        return 0
    finally:
        await close_database()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Show reconciled stock for a product")
    parser.add_argument("product_id", type=int)
    parser.add_argument("--size", help="Restrict to one size code")
    parser.add_argument("--color", type=int, help="Color ID for the availability check")
    parser.add_argument("--qty", type=int, help="Requested quantity to check")
    sys.exit(asyncio.run(main(parser.parse_args())))
