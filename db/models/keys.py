# db/models/keys.py
from sqlalchemy import Column, Integer, String, Boolean, CheckConstraint
from sqlalchemy.types import TIMESTAMP
from sqlalchemy.sql import expression

from db.models.base import Base

# Largest id the Integer column holds on every backend
KEY_ID_MAX = 2**31 - 1


class KeyModel(Base):
    __tablename__ = 'keys'
    __table_args__ = (
        # claimed_at is set exactly when claimed is
        CheckConstraint(
            "(claimed AND claimed_at IS NOT NULL) OR (NOT claimed AND claimed_at IS NULL)",
            name="ck_keys_claimed_at_matches_claimed",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    image_url = Column(String, nullable=False)
    secret = Column(String, nullable=False, unique=True)

    claimed = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    claimed_at = Column(TIMESTAMP(timezone=True), nullable=True)
