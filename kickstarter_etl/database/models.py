"""
Kickstarter ETL Database Models

Star schema for Kickstarter campaign outcomes.

Tables:
- products: One row per campaign (kickstarter_id is unique)
- main_categories, categories, currencies, states, areas: Label dimensions
- kickstarts: Campaign outcome facts, referencing every dimension

Dimension rows are written once per source record, so identical labels
appear on many rows unless a caching resolver is used by the writer.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import DECIMAL, BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from kickstarter_etl.database.engine import Base


class Product(Base):
    """A crowdfunding campaign, identified by its Kickstarter id."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    kickstarter_id: Mapped[int | None] = mapped_column(
        BigInteger, unique=True, comment="Source identifier of the campaign"
    )
    name: Mapped[str | None] = mapped_column(String(255))


class MainCategory(Base):
    __tablename__ = "main_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(255))


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(255))


class Currency(Base):
    __tablename__ = "currencies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str | None] = mapped_column(String(255), comment="ISO currency code, e.g. USD")


class State(Base):
    __tablename__ = "states"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    state: Mapped[str | None] = mapped_column(String(255), comment="Lifecycle label, e.g. successful")


class Area(Base):
    __tablename__ = "areas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    country: Mapped[str | None] = mapped_column(String(255))


class Kickstart(Base):
    """
    Outcome metrics of one campaign.

    Foreign keys hold the store-assigned ids of the dimension rows,
    never the in-memory surrogate keys.
    """

    __tablename__ = "kickstarts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    backers: Mapped[int | None] = mapped_column(Integer)
    goal: Mapped[Decimal | None] = mapped_column(DECIMAL(12, 2))
    goal_usd_real: Mapped[Decimal | None] = mapped_column(DECIMAL(12, 2))
    pledged: Mapped[Decimal | None] = mapped_column(DECIMAL(12, 2))
    pledged_usd: Mapped[Decimal | None] = mapped_column(DECIMAL(12, 2))
    pledged_usd_real: Mapped[Decimal | None] = mapped_column(DECIMAL(12, 2))

    product_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("products.id"))
    main_category_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("main_categories.id"))
    category_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("categories.id"))
    currency_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("currencies.id"))
    state_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("states.id"))
    area_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("areas.id"))


# Creation order; kickstarts depends on every other table
DIMENSION_MODELS = (Product, MainCategory, Category, Currency, State, Area)
ALL_MODELS = (*DIMENSION_MODELS, Kickstart)
