"""One-time password model for password reset."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Uuid

from marketplace.database import Base


class OtpToken(Base):
    """OTP issued on a reset request. Valid for its owner while now < expires_at."""

    __tablename__ = "otp_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    otp = Column(String(16), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
