"""
Kickstarter ETL Record Schemas

In-memory records passed between the reader, transformer and writer.
"""
from pydantic import BaseModel, ConfigDict


class BaseRecord(BaseModel):
    """Base record with common configuration"""

    model_config = ConfigDict(frozen=True)


class SourceRecord(BaseRecord):
    """One row of the Kickstarter projects CSV."""
    id: int
    name: str
    category: str
    main_category: str
    currency: str
    deadline: str  # Opaque, never parsed
    launched: str  # Opaque, never parsed
    state: str
    country: str
    backers: int
    goal: float
    pledged: float
    usd_pledged: float
    usd_pledged_real: float
    usd_goal_real: float


# Dimension Records
class Product(BaseRecord):
    id: int
    kickstarter_id: int
    name: str


class MainCategory(BaseRecord):
    id: int
    name: str


class Category(BaseRecord):
    id: int
    name: str


class Currency(BaseRecord):
    id: int
    type: str


class Date(BaseRecord):
    """Launch and deadline strings; kept in memory only."""
    id: int
    launched: str
    deadline: str


class State(BaseRecord):
    id: int
    state: str


class Area(BaseRecord):
    id: int
    country: str


# Fact Record
class Kickstart(BaseRecord):
    """A campaign outcome with its dimensions and their surrogate keys."""
    product: Product
    main_category: MainCategory
    category: Category
    currency: Currency
    date: Date
    state: State
    area: Area

    product_id: int
    main_category_id: int
    category_id: int
    currency_id: int
    date_id: int
    state_id: int
    area_id: int

    backers: int
    goal: float
    goal_usd_real: float
    pledged: float
    pledged_usd: float
    pledged_usd_real: float
