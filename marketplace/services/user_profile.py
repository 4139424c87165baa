"""Buyer/seller roles and followed categories."""

import uuid

from sqlalchemy.orm import Session

from marketplace.models.user_role import Buyer, Seller, UserCategory


class UserProfileService:
    """Replace-style updates of a user's marketplace profile."""

    def set_roles(self, db: Session, user_id: uuid.UUID, is_buyer: bool, is_seller: bool) -> None:
        """(Re)register the user as a buyer and/or seller. A false flag leaves that role untouched."""
        for enabled, model in ((is_buyer, Buyer), (is_seller, Seller)):
            if not enabled:
                continue
            db.query(model).filter(model.user_id == user_id).delete(synchronize_session="fetch")
            db.add(model(user_id=user_id))
            db.commit()

    def set_categories(self, db: Session, user_id: uuid.UUID, category_ids: list[int]) -> str:
        """Replace the set of categories the user follows."""
        db.query(UserCategory).filter(UserCategory.user_id == user_id).delete(synchronize_session="fetch")
        if not category_ids:
            db.commit()
            return "User categories cleared"

        db.add_all(UserCategory(user_id=user_id, category_id=cid) for cid in dict.fromkeys(category_ids))
        db.commit()
        return "User categories updated successfully"


_user_profile_service: UserProfileService | None = None


def get_user_profile_service() -> UserProfileService:
    """Get singleton user profile service instance."""
    global _user_profile_service
    if _user_profile_service is None:
        _user_profile_service = UserProfileService()
    return _user_profile_service
