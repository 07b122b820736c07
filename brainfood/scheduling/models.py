"""
SQLAlchemy ORM Models for the Card Store

Defines Box, Card and ReviewLog tables. The scheduling fields of Card map
one-to-one onto SchedulingState; ReviewLog rows map onto ReviewLogEntry.
"""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Box(Base):
    """
    A deck of cards owned by one user.
    """
    __tablename__ = 'boxes'

    id = Column(String(36), primary_key=True)
    user_id = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    cards = relationship("Card", back_populates="box", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Box({self.id}, {self.user_id}, {self.name!r})>"


class Card(Base):
    """
    A flashcard and its persistent scheduling state.

    `version` is bumped on every write; an update against a stale version
    fails instead of silently overwriting a concurrent review.
    """
    __tablename__ = 'cards'

    id = Column(String(36), primary_key=True)
    box_id = Column(String(36), ForeignKey('boxes.id', ondelete='CASCADE'), nullable=False, index=True)

    front = Column(Text, nullable=False)
    back = Column(Text, nullable=False)

    # Scheduling state
    stability = Column(Float, nullable=False)  # Days
    difficulty = Column(Float, nullable=False)  # 1-10
    due = Column(DateTime(timezone=True), nullable=False, index=True)
    last_review_at = Column(DateTime(timezone=True), nullable=True)
    reps = Column(Integer, nullable=False, default=0)
    lapses = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False)
    version = Column(Integer, nullable=False)

    box = relationship("Box", back_populates="cards")
    review_logs = relationship("ReviewLog", back_populates="card", cascade="all, delete-orphan")

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Card({self.id}, box={self.box_id}, due={self.due})>"


class ReviewLog(Base):
    """
    Log entry for a single review of a card. Never updated after insert.
    """
    __tablename__ = 'review_logs'

    id = Column(Integer, primary_key=True, autoincrement=True)
    card_id = Column(String(36), ForeignKey('cards.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = Column(String(255), nullable=False)

    rating = Column(Integer, nullable=False)  # 1=AGAIN, 2=HARD, 3=GOOD, 4=EASY
    reviewed_at = Column(DateTime(timezone=True), nullable=False, index=True)

    previous_stability = Column(Float, nullable=False)
    new_stability = Column(Float, nullable=False)
    previous_due = Column(DateTime(timezone=True), nullable=False)
    new_due = Column(DateTime(timezone=True), nullable=False)
    interval = Column(Integer, nullable=False)  # Days

    card = relationship("Card", back_populates="review_logs")

    def __repr__(self):
        return f"<ReviewLog(id={self.id}, card={self.card_id}, rating={self.rating})>"
