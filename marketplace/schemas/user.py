"""Pydantic schemas for user profile endpoints."""

from pydantic import BaseModel


class CreateRequest(BaseModel):
    is_buyer: bool
    is_seller: bool


class CategoryRequest(BaseModel):
    category_id: int


class CategoriesRequest(BaseModel):
    categories: list[CategoryRequest]
