"""Static age categories for the storefront.

Categories are fixed reference data: four age brackets that every product
belongs to. They are not persisted and cannot be edited from the back office.
"""

from dataclasses import dataclass, field
from enum import Enum

from protean.exceptions import ObjectNotFoundError


class AgeCategory(Enum):
    NEWBORN = "0-6-months"
    INFANT = "6-12-months"
    TODDLER = "1-3-years"
    PRESCHOOL = "3-5-years"


@dataclass(frozen=True)
class CategoryInfo:
    id: str
    name: str
    display_name: str
    description: str
    banner_images: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "display_name": self.display_name,
            "description": self.description,
            "banner_images": list(self.banner_images),
        }


_UNSPLASH = "https://images.unsplash.com"

CATEGORIES: tuple[CategoryInfo, ...] = (
    CategoryInfo(
        id=AgeCategory.NEWBORN.value,
        name="0-6 Months",
        display_name="Newborn Essentials",
        description="Everything your newborn needs for their first 6 months",
        banner_images=[
            f"{_UNSPLASH}/photo-1546015720-b8b30df5aa27?w=800&h=400&fit=crop",
            f"{_UNSPLASH}/photo-1587318123555-4d7d4db82ba7?w=800&h=400&fit=crop",
            f"{_UNSPLASH}/photo-1515488042361-ee33e5f04ead?w=800&h=400&fit=crop",
        ],
    ),
    CategoryInfo(
        id=AgeCategory.INFANT.value,
        name="6-12 Months",
        display_name="Growing Explorer",
        description="Support your baby's development and exploration",
        banner_images=[
            f"{_UNSPLASH}/photo-1578662996442-48f60103fc96?w=800&h=400&fit=crop",
            f"{_UNSPLASH}/photo-1555252333-9f8e92e65df9?w=800&h=400&fit=crop",
            f"{_UNSPLASH}/photo-1612927601601-6638404737ce?w=800&h=400&fit=crop",
        ],
    ),
    CategoryInfo(
        id=AgeCategory.TODDLER.value,
        name="1-3 Years",
        display_name="Active Toddler",
        description="Gear for your active and curious toddler",
        banner_images=[
            f"{_UNSPLASH}/photo-1503454537195-1dcabb73ffb9?w=800&h=400&fit=crop",
            f"{_UNSPLASH}/photo-1558618666-fcd25c85cd64?w=800&h=400&fit=crop",
            f"{_UNSPLASH}/photo-1596464716127-f2a82984de30?w=800&h=400&fit=crop",
        ],
    ),
    CategoryInfo(
        id=AgeCategory.PRESCHOOL.value,
        name="3-5 Years",
        display_name="Young Learner",
        description="Educational and fun products for preschoolers",
        banner_images=[
            f"{_UNSPLASH}/photo-1576267423445-b2e0074d68a4?w=800&h=400&fit=crop",
            f"{_UNSPLASH}/photo-1564533322166-638b3e34e50e?w=800&h=400&fit=crop",
            f"{_UNSPLASH}/photo-1545558014-8692077e9b5c?w=800&h=400&fit=crop",
        ],
    ),
)

_BY_ID = {category.id: category for category in CATEGORIES}


def get_category(category_id: str) -> CategoryInfo:
    try:
        return _BY_ID[category_id]
    except KeyError:
        raise ObjectNotFoundError(f"Category {category_id} not found") from None


def is_valid_category(category_id: str) -> bool:
    return category_id in _BY_ID
