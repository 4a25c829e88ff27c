from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from .db import Base


class FilteredListingRecord(Base):
    """A listing that passed the pre-filter. Written once per URL, never overwritten."""

    __tablename__ = "filtered_listings"
    id = Column(Integer, primary_key=True)
    url = Column(String(1000), unique=True, nullable=False, index=True)
    platform = Column(String(50), nullable=False)
    title = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    image_urls = Column(JSON, nullable=False, default=list)
    description = Column(Text, nullable=False, default="")
    raw_data = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    appraisal = relationship("AppraisalRecord", back_populates="listing", uselist=False)


class AppraisalRecord(Base):
    """The one and only appraisal of a filtered listing."""

    __tablename__ = "appraisals"
    id = Column(Integer, primary_key=True)
    listing_id = Column(
        Integer,
        ForeignKey("filtered_listings.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    is_authentic = Column(Boolean, nullable=False)
    estimated_era = Column(String(100), nullable=False)
    estimated_value = Column(Float, nullable=True)
    current_price = Column(Float, nullable=False)
    margin = Column(Float, nullable=True)
    confidence = Column(Float, nullable=False)
    reasoning = Column(Text, nullable=False, default="")
    red_flags = Column(JSON, nullable=False, default=list)
    references = Column("reference_list", JSON, nullable=False, default=list)
    is_opportunity = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    listing = relationship("FilteredListingRecord", back_populates="appraisal")
