"""Product registration — command, handler and demo catalogue seed."""

import json

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.product.product import Product
from ordering.utils.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Product")
class RegisterProduct:
    product_id = Identifier()  # generated when absent
    name = String(required=True, max_length=255, sanitize=False)
    price = Integer(required=True, min_value=0)
    currency = String(max_length=3, default="INR")
    stock = Integer(default=0, min_value=0)
    sizes = Text(sanitize=False)  # JSON array
    colors = Text(sanitize=False)  # JSON array
    images = Text(sanitize=False)  # JSON array


@ordering.command_handler(part_of=Product)
class RegisterProductHandler:
    @handle(RegisterProduct)
    def register_product(self, command):
        product = Product.register(
            product_id=command.product_id,
            name=command.name,
            price=command.price,
            currency=command.currency or "INR",
            stock=command.stock or 0,
            sizes=json.loads(command.sizes) if command.sizes else [],
            colors=json.loads(command.colors) if command.colors else [],
            images=json.loads(command.images) if command.images else [],
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)


DEMO_CATALOGUE = [
    {
        "name": "Classic Oxford Shirt",
        "price": 99900,
        "stock": 50,
        "sizes": ["S", "M", "L", "XL"],
        "colors": ["White", "Blue"],
    },
    {
        "name": "Linen Casual Shirt",
        "price": 149900,
        "stock": 30,
        "sizes": ["M", "L", "XL"],
        "colors": ["Beige", "Olive"],
    },
    {
        "name": "Printed Kurta Shirt",
        "price": 79900,
        "stock": 20,
        "sizes": ["S", "M", "L"],
        "colors": ["Maroon"],
    },
]


def seed_catalogue(products=None):
    """Register demo products. Must run inside the ordering domain context."""
    product_ids = []
    for entry in products or DEMO_CATALOGUE:
        product_id = current_domain.process(
            RegisterProduct(
                name=entry["name"],
                price=entry["price"],
                stock=entry["stock"],
                sizes=json.dumps(entry.get("sizes", [])),
                colors=json.dumps(entry.get("colors", [])),
                images=json.dumps(entry.get("images", [])),
            ),
            asynchronous=False,
        )
        product_ids.append(product_id)

    logger.info("Catalogue seeded", product_count=len(product_ids))
    return product_ids
