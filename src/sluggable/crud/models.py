"""Database table definitions for sluggable records"""

from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, String, Text

from sluggable.options import SlugOptions


class SluggableModel(SQLModel):
    """Base for tables whose rows get a slug assigned on every insert and update.

    slug_options receives the application-wide defaults and narrows them to this table.
    """

    def slug_options(self, defaults: SlugOptions) -> SlugOptions:
        raise NotImplementedError("Sluggable models must define slug_options()")


class SoftDeletableModel(SluggableModel):
    """Sluggable rows that are hidden instead of deleted; hidden rows still hold their slug"""
    deleted_at: Optional[datetime] = Field(default=None, nullable=True, description="Set when soft-deleted")

    @property
    def trashed(self) -> bool:
        return self.deleted_at is not None


class Article(SoftDeletableModel, table=True):
    """A titled article addressed by a slug derived from its title"""
    __tablename__ = "articles"
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(..., sa_column=Column(Text, nullable=False))
    slug: Optional[str] = Field(default=None, sa_column=Column(String(255), unique=True, nullable=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))

    def slug_options(self, defaults: SlugOptions) -> SlugOptions:
        # the column is fixed, so a configured slug_field does not apply here
        return defaults.generate_slugs_from("title").save_slugs_to("slug")


class Page(SluggableModel, table=True):
    """A page within a site section, addressed by section and title"""
    __tablename__ = "pages"
    id: Optional[int] = Field(default=None, primary_key=True)
    section: str = Field(..., sa_column=Column(String(64), nullable=False))
    title: str = Field(..., sa_column=Column(Text, nullable=False))
    slug: Optional[str] = Field(default=None, sa_column=Column(String(100), unique=True, nullable=True))

    def slug_options(self, defaults: SlugOptions) -> SlugOptions:
        return (
            defaults
            .generate_slugs_from(["section", "title"])
            .save_slugs_to("slug")
            .slugs_should_be_no_longer_than(min(defaults.maximum_length, 90))
        )
