"""Stockroom database management CLI.

Creates and drops the database schemas of both domains and loads the
reference seed data.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load warehouses, suppliers, products and stock
"""

import argparse
import json
import sys

import structlog
from protean.utils.globals import current_domain

from shared.db import drop_db, setup_db

logger = structlog.get_logger(__name__)

DOMAIN_NAMES = ["inventory", "procurement"]

SEED_WAREHOUSES = [
    {
        "name": "Main Warehouse",
        "address": {"street": "123 Main St", "city": "New York", "state": "NY", "zip_code": "10001"},
        "phone": "555-123-4567",
        "email": "main@warehouse.com",
    },
    {
        "name": "West Coast Warehouse",
        "address": {"street": "456 West Ave", "city": "Los Angeles", "state": "CA", "zip_code": "90210"},
        "phone": "555-987-6543",
        "email": "west@warehouse.com",
    },
]

SEED_SUPPLIERS = [
    {
        "name": "ABC Electronics",
        "street": "789 Supplier Blvd",
        "city": "Chicago",
        "state": "IL",
        "zip_code": "60601",
        "phone": "555-111-2222",
        "email": "contact@abcelectronics.com",
        "contact_person": "John Smith",
    },
    {
        "name": "XYZ Manufacturing",
        "street": "321 Factory Rd",
        "city": "Detroit",
        "state": "MI",
        "zip_code": "48201",
        "phone": "555-333-4444",
        "email": "info@xyzmanufacturing.com",
        "contact_person": "Jane Doe",
    },
]

SEED_PRODUCTS = [
    {
        "name": "Laptop Computer",
        "sku": "LAPTOP-001",
        "description": "High-performance laptop with 16GB RAM",
        "price": 999.99,
        "cost": 750.00,
        "category": "Electronics",
        "brand": "TechCorp",
        "unit": "Piece",
        "minimum_stock_level": 10,
        "maximum_stock_level": 100,
    },
    {
        "name": "Wireless Mouse",
        "sku": "MOUSE-001",
        "description": "Ergonomic wireless mouse",
        "price": 29.99,
        "cost": 15.00,
        "category": "Electronics",
        "brand": "TechCorp",
        "unit": "Piece",
        "minimum_stock_level": 50,
        "maximum_stock_level": 200,
    },
    {
        "name": "Office Chair",
        "sku": "CHAIR-001",
        "description": "Comfortable office chair with lumbar support",
        "price": 199.99,
        "cost": 120.00,
        "category": "Furniture",
        "brand": "ComfortMax",
        "unit": "Piece",
        "minimum_stock_level": 5,
        "maximum_stock_level": 50,
    },
]

# (product index, warehouse index, quantity, reserved)
SEED_STOCK = [
    (0, 0, 25, 5),
    (0, 1, 15, 2),
    (1, 0, 100, 10),
    (2, 0, 8, 1),
]


def _domains(names=None):
    from inventory.domain import inventory
    from procurement.domain import procurement

    all_domains = {"inventory": inventory, "procurement": procurement}
    return {name: all_domains[name] for name in names} if names else all_domains


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def seed_reference_data() -> dict:
    """Load the reference warehouses, suppliers, products and stock levels.

    Returns the ids created, keyed by kind.
    """
    from inventory.ledger.stocking import CreateInventoryRecord
    from inventory.product.management import CreateProduct
    from inventory.warehouse.management import CreateWarehouse
    from procurement.supplier.management import RegisterSupplier

    domains = _domains()
    for domain in domains.values():
        domain.init()

    created = {"warehouses": [], "products": [], "inventory_records": [], "suppliers": []}

    with domains["inventory"].domain_context():
        for data in SEED_WAREHOUSES:
            command = CreateWarehouse(**{**data, "address": json.dumps(data["address"])})
            created["warehouses"].append(current_domain.process(command, asynchronous=False))
        for data in SEED_PRODUCTS:
            created["products"].append(current_domain.process(CreateProduct(**data), asynchronous=False))
        for product_index, warehouse_index, quantity, reserved in SEED_STOCK:
            command = CreateInventoryRecord(
                product_id=created["products"][product_index],
                warehouse_id=created["warehouses"][warehouse_index],
                quantity=quantity,
                reserved_quantity=reserved,
            )
            created["inventory_records"].append(current_domain.process(command, asynchronous=False))

    with domains["procurement"].domain_context():
        for data in SEED_SUPPLIERS:
            created["suppliers"].append(current_domain.process(RegisterSupplier(**data), asynchronous=False))

    logger.info("seed_data_loaded", **{kind: len(ids) for kind, ids in created.items()})
    return created


def main():
    parser = argparse.ArgumentParser(description="Stockroom database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    subparsers.add_parser("seed", help="Load reference seed data")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "seed":
        seed_reference_data()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
