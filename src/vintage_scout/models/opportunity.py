from dataclasses import dataclass

from .appraisal import Appraisal
from .listing import Listing


@dataclass
class Opportunity:
    """A listing whose appraisal cleared the margin and confidence thresholds."""
    listing: Listing
    appraisal: Appraisal

    @property
    def margin(self) -> float:
        return self.appraisal.margin or 0.0

    @property
    def roi_pct(self) -> float | None:
        if self.listing.price and self.listing.price > 0 and self.appraisal.margin is not None:
            return self.appraisal.margin / self.listing.price * 100
        return None
