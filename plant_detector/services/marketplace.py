import datetime
import logging
from typing import Callable, Iterable, List, Optional

from plant_detector.models import MarketCategory, MarketItem, SellListingRequest

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"
CATEGORIES = [ALL_CATEGORIES] + [c.value for c in MarketCategory]

DEFAULT_LISTING_IMAGE = (
    "https://images.unsplash.com/photo-1530836369250-ef72a3f5cda8?auto=format&fit=crop&q=80&w=200"
)

INITIAL_ITEMS = [
    MarketItem(
        id="1",
        name="Organic Tomato Seeds",
        price="$5.00",
        category=MarketCategory.SEEDS,
        image="https://images.unsplash.com/photo-1592841200221-a6898f307baa?auto=format&fit=crop&q=80&w=200",
        location="Green Valley",
        seller="Sarah Jenkins",
        rating=4.8,
    ),
    MarketItem(
        id="2",
        name="Heavy Duty Garden Shovel",
        price="$24.50",
        category=MarketCategory.TOOLS,
        image="https://images.unsplash.com/photo-1530268578403-ade528997a31?auto=format&fit=crop&q=80&w=200",
        location="Uptown Hardware",
        seller="Mike Tools",
        rating=4.5,
    ),
    MarketItem(
        id="3",
        name="Natural NPK Fertilizer (5kg)",
        price="$18.00",
        category=MarketCategory.FERTILIZER,
        image="https://images.unsplash.com/photo-1628186177579-2a9009804c8f?auto=format&fit=crop&q=80&w=200",
        location="Farm Depot",
        seller="Green Earth Co",
        rating=4.9,
    ),
    MarketItem(
        id="4",
        name="Grafted Mango Sapling",
        price="$12.00",
        category=MarketCategory.PLANTS,
        image="https://images.unsplash.com/photo-1550989460-0adf9ea622e2?auto=format&fit=crop&q=80&w=200",
        location="Sunny Nursery",
        seller="Plant Pros",
        rating=4.7,
    ),
]


class ListingValidationError(ValueError):
    pass


def filter_items(items: Iterable[MarketItem], category: str = ALL_CATEGORIES, search: str = "") -> List[MarketItem]:
    """Items in ``category`` (or any, for "All") whose name contains ``search``, case-insensitive."""
    needle = (search or "").lower()
    return [
        item for item in items
        if (category == ALL_CATEGORIES or item.category.value == category)
        and needle in item.name.lower()
    ]


class Marketplace:
    """In-memory listing catalog; new listings go to the front."""

    def __init__(
        self,
        items: Optional[Iterable[MarketItem]] = None,
        clock: Callable[[], datetime.datetime] = datetime.datetime.now,
    ):
        self._items: List[MarketItem] = list(INITIAL_ITEMS if items is None else items)
        self.clock = clock

    @property
    def items(self) -> List[MarketItem]:
        return list(self._items)

    def search(self, category: str = ALL_CATEGORIES, search: str = "") -> List[MarketItem]:
        return filter_items(self._items, category, search)

    def _new_id(self) -> str:
        candidate = int(self.clock().timestamp() * 1000)
        existing = {item.id for item in self._items}
        while str(candidate) in existing:
            candidate += 1
        return str(candidate)

    def post_item(self, form: SellListingRequest) -> MarketItem:
        name = form.name.strip()
        price = form.price.strip()
        location = form.location.strip()
        if not name or not price or not location:
            raise ListingValidationError("Please fill in all required fields.")

        item = MarketItem(
            id=self._new_id(),
            name=name,
            price=price if price.startswith("$") else f"${price}",
            category=form.category,
            image=form.image or DEFAULT_LISTING_IMAGE,
            location=location,
            seller="You",
            rating=5.0,
        )
        self._items = [item] + self._items
        logger.info(f"✓ Listing posted: {item.name} ({item.category.value}, {item.price})")
        return item
