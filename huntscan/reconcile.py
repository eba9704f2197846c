"""
Session Reconciliation

Combines a start and an end FieldSet into a SessionDelta.
"""

import logging

from .models import FieldSet, SessionDelta

logger = logging.getLogger(__name__)

# Gauge units per counter unit
GAUGE_SCALE = 1000.0


def experience_gained(start_level: int, start_exp: float, end_level: int, end_exp: float) -> float:
    """
    Experience gained in percent of a level, accounting for level-ups.

    Each level-up resets the percentage to 0, and every intermediate level
    is assumed to have been fully traversed (100% each).

    Example:
        199 @ 80%  ->  201 @ 10%  =  (100 - 80) + 1 * 100 + 10  =  130.0
    """
    level_diff = end_level - start_level
    if level_diff > 0:
        return (100.0 - start_exp) + (level_diff - 1) * 100.0 + end_exp
    return end_exp - start_exp


def combined_counter(count: int, gauge: int) -> float:
    """Counter plus fractional gauge progress, e.g. 5 and 200/1000 -> 5.2."""
    return count + gauge / GAUGE_SCALE


def reconcile(start: FieldSet, end: FieldSet) -> SessionDelta:
    """
    Compute the session result between two screenshots.

    Never fails. Absent fields count as 0 for the differences, so a missing
    value and a recognized zero look the same in the result; inspect the
    source FieldSets when completeness matters.

    The counter+gauge gain is a plain difference with no wraparound: if the
    counter was spent or rolled over during the session the gain comes out
    negative and counter_rollover_suspected is set on the result.

    Args:
        start: Fields from the start-of-session screenshot
        end: Fields from the end-of-session screenshot

    Returns:
        SessionDelta
    """
    start_level = start.level or 0
    end_level = end.level or 0
    start_exp = start.exp_percent or 0.0
    end_exp = end.exp_percent or 0.0

    start_currency = start.currency or 0
    end_currency = end.currency or 0

    start_counter = start.counter or 0
    end_counter = end.counter or 0
    start_gauge = start.gauge or 0
    end_gauge = end.gauge or 0

    start_fragments = start.fragments or 0
    end_fragments = end.fragments or 0

    delta = SessionDelta(
        start_level=start_level,
        end_level=end_level,
        start_exp_percent=start_exp,
        end_exp_percent=end_exp,
        exp_gained=experience_gained(start_level, start_exp, end_level, end_exp),
        start_currency=start_currency,
        end_currency=end_currency,
        currency_gained=end_currency - start_currency,
        start_counter=start_counter,
        end_counter=end_counter,
        start_gauge=start_gauge,
        end_gauge=end_gauge,
        counter_gained=(combined_counter(end_counter, end_gauge)
                        - combined_counter(start_counter, start_gauge)),
        start_fragments=start_fragments,
        end_fragments=end_fragments,
        fragments_gained=end_fragments - start_fragments,
    )

    if delta.counter_rollover_suspected:
        logger.warning(
            f"Counter total decreased ({start_counter}+{start_gauge}/1000 -> "
            f"{end_counter}+{end_gauge}/1000); reported without wraparound"
        )
    return delta
