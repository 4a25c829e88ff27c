import logging

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..exceptions import DuplicateAppraisalError, PersistenceError
from ..models.appraisal import Appraisal
from ..models.listing import Listing
from .models import AppraisalRecord, FilteredListingRecord

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class ScanStore:
    """Durable memory of filtered listings and their appraisals.

    Filtered listings are keyed by URL and inserted at most once. Each
    filtered listing gets at most one appraisal; a second ``create_appraisal``
    for the same listing raises ``DuplicateAppraisalError``.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def upsert_filtered_listing(self, listing: Listing) -> FilteredListingRecord:
        """Insert the listing unless its URL is already stored; return the stored row."""
        values = {
            "url": listing.url,
            "platform": listing.platform,
            "title": listing.title,
            "price": listing.price,
            "image_urls": list(listing.image_urls),
            "description": listing.description,
            "raw_data": listing.raw_data,
        }
        try:
            with self._session_factory() as session:
                insert = _INSERT_BY_DIALECT.get(session.get_bind().dialect.name)
                if insert is not None:
                    stmt = insert(FilteredListingRecord).values(**values)
                    session.execute(stmt.on_conflict_do_nothing(index_elements=["url"]))
                    session.commit()
                else:
                    self._insert_if_absent(session, values)

                return session.scalars(
                    select(FilteredListingRecord).where(FilteredListingRecord.url == listing.url)
                ).one()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to store listing {listing.url}: {e}") from e

    @staticmethod
    def _insert_if_absent(session, values: dict) -> None:
        exists = session.scalars(
            select(FilteredListingRecord.id).where(FilteredListingRecord.url == values["url"])
        ).first()
        if exists is not None:
            return
        session.add(FilteredListingRecord(**values))
        try:
            session.commit()
        except IntegrityError:
            # Lost a race with another run; the row is there either way
            session.rollback()

    def find_filtered_listing_by_url(self, url: str) -> FilteredListingRecord | None:
        try:
            with self._session_factory() as session:
                return session.scalars(
                    select(FilteredListingRecord).where(FilteredListingRecord.url == url)
                ).first()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to look up listing {url}: {e}") from e

    def find_appraisal_by_listing_id(self, listing_id: int) -> AppraisalRecord | None:
        try:
            with self._session_factory() as session:
                return session.scalars(
                    select(AppraisalRecord).where(AppraisalRecord.listing_id == listing_id)
                ).first()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to look up appraisal for listing {listing_id}: {e}") from e

    def create_appraisal(
        self, listing_id: int, appraisal: Appraisal, is_opportunity: bool
    ) -> AppraisalRecord:
        record = AppraisalRecord(
            listing_id=listing_id,
            is_authentic=appraisal.is_authentic,
            estimated_era=appraisal.estimated_era,
            estimated_value=appraisal.estimated_value,
            current_price=appraisal.current_price,
            margin=appraisal.margin,
            confidence=appraisal.confidence,
            reasoning=appraisal.reasoning,
            red_flags=list(appraisal.red_flags),
            references=list(appraisal.references),
            is_opportunity=is_opportunity,
        )
        with self._session_factory() as session:
            session.add(record)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                duplicate = session.scalars(
                    select(AppraisalRecord.id).where(AppraisalRecord.listing_id == listing_id)
                ).first()
                if duplicate is not None:
                    raise DuplicateAppraisalError(listing_id) from e
                raise PersistenceError(f"Failed to store appraisal for listing {listing_id}: {e}") from e
            except SQLAlchemyError as e:
                session.rollback()
                raise PersistenceError(f"Failed to store appraisal for listing {listing_id}: {e}") from e
            session.refresh(record)
            return record

    def count_appraisals(self, opportunities_only: bool = False) -> int:
        with self._session_factory() as session:
            stmt = select(func.count(AppraisalRecord.id))
            if opportunities_only:
                stmt = stmt.where(AppraisalRecord.is_opportunity.is_(True))
            return session.scalar(stmt)
