# app/data/seed.py
from decimal import Decimal

from app.data.database import SessionLocal
from app.data.models import CategoryModel, ProductModel
from app.utils.logging import get_logger

logger = get_logger(__name__)

CATALOG = {
    "Peripherals": [
        ("Keyboard", "Mechanical keyboard", Decimal("199.99"), 25),
        ("Mouse", "Wireless mouse", Decimal("49.50"), 40),
    ],
    "Displays": [
        ("Monitor", "27 inch IPS monitor", Decimal("899.00"), 10),
    ],
}


def seed():
    db = SessionLocal()
    try:
        #seed tylko gdy katalog pusty
        if db.query(ProductModel).first():
            logger.info("Catalog not empty, skipping seed")
            return

        for category_name, products in CATALOG.items():
            category = CategoryModel(name=category_name)
            db.add(category)
            for name, description, price, stock in products:
                db.add(
                    ProductModel(
                        name=name,
                        description=description,
                        price=price,
                        stock=stock,
                        category=category,
                    )
                )
        db.commit()
        logger.info(f"Seeded {sum(len(p) for p in CATALOG.values())} products")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
