"""Catalogue seeding from the bundled sample products."""

import json
from pathlib import Path

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from miniworld.catalogue.product.product import Product
from miniworld.domain import miniworld
from miniworld.utils.logging import get_logger

logger = get_logger(__name__)

SAMPLE_PRODUCTS_FILE = Path(__file__).parent / "sample_products.json"


def load_sample_products() -> list[dict]:
    with SAMPLE_PRODUCTS_FILE.open(encoding="utf-8") as fp:
        return json.load(fp)


@miniworld.command(part_of="Product")
class SeedCatalogue:
    """Load the sample products into an empty catalogue."""

    requested_by: String(max_length=255)


@miniworld.command_handler(part_of=Product)
class SeedCatalogueHandler:
    @handle(SeedCatalogue)
    def seed_catalogue(self, command):
        repo = current_domain.repository_for(Product)
        if repo._dao.query.all().total > 0:
            raise ValidationError({"catalogue": ["Catalogue already contains products"]})

        created = 0
        for data in load_sample_products():
            repo.add(Product.create(**data))
            created += 1

        logger.info("catalogue_seeded", products=created, requested_by=command.requested_by)
        return created
