from ..models.appraisal import Appraisal


def is_opportunity(appraisal: Appraisal, min_margin: float, min_confidence: float) -> bool:
    """True when the appraisal has a margin and clears both thresholds."""
    return (
        appraisal.margin is not None
        and appraisal.margin >= min_margin
        and appraisal.confidence >= min_confidence
    )
