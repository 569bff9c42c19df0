"""
SQLAlchemy models for the application.
All database models inherit from Base (declarative base).
"""
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Table
from sqlalchemy.sql import func
from portfolio_api.database import Base


class Image(Base):
    """
    Image model.
    Stores the path of an uploaded image plus optional title and description.
    Images are shared through the join tables below and are never deleted
    when a parent entity unlinks them.
    """
    __tablename__ = "images"

    id = Column(Integer, primary_key=True, index=True)
    path = Column(String, nullable=False)
    title = Column(String, nullable=True)
    description = Column(Text, nullable=True)


class User(Base):
    """CMS login account."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)


class AboutSection(Base):
    __tablename__ = "about_sections"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(Text, nullable=False)


class Album(Base):
    __tablename__ = "albums"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)


class BlogPost(Base):
    __tablename__ = "blog_posts"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    title = Column(String, nullable=False)
    subtitle = Column(String, nullable=True)
    text = Column(Text, nullable=False)


class Work(Base):
    __tablename__ = "works"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    link = Column(String, nullable=True)


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    contact = Column(String, nullable=False)
    mail = Column(String, nullable=False)
    address = Column(String, nullable=True)
    phone = Column(String, nullable=True)


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    dates = Column(String, nullable=False)
    location = Column(String, nullable=False)
    link = Column(String, nullable=True)


class SocialMedia(Base):
    __tablename__ = "social_media"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    link = Column(String, nullable=False)


def _image_link_table(name: str, parent_table: str, parent_column: str) -> Table:
    return Table(
        name,
        Base.metadata,
        Column(parent_column, Integer, ForeignKey(f"{parent_table}.id"), primary_key=True),
        Column("image_id", Integer, ForeignKey("images.id"), primary_key=True),
    )


# Join tables (no attributes beyond the two keys)
about_sections_images = _image_link_table("about_sections_images", "about_sections", "about_section_id")
albums_images = _image_link_table("albums_images", "albums", "album_id")
blog_posts_images = _image_link_table("blog_posts_images", "blog_posts", "blog_post_id")
works_images = _image_link_table("works_images", "works", "work_id")
