"""Buyer/seller roles and followed categories of a user."""

from sqlalchemy import Column, ForeignKey, Integer, Uuid

from marketplace.database import Base


class Buyer(Base):
    __tablename__ = "buyers"

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)


class Seller(Base):
    __tablename__ = "sellers"

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)


class UserCategory(Base):
    """Product category a user follows. Category ids belong to the catalog."""

    __tablename__ = "user_categories"

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(Integer, primary_key=True)
