"""
Initial stipple placement by density-weighted rejection sampling
"""

import logging
import math

import numpy as np

from .seeded_stream import Mulberry32

logger = logging.getLogger(__name__)


def acceptance_rate(weights, cutoff):
    """
    Probability that one uniform candidate is accepted

    Every pixel covers the same area, so this is the mean over pixels of the
    weight where it exceeds the cutoff.
    """
    return float(np.mean(np.where(weights > cutoff, weights, 0.0)))


def candidate_budget(settings, rate):
    """
    Number of rejection candidates to draw before falling back to uniform fill

    desired_count / rate candidates are expected; budget_factor times that is
    allowed, never more than max_candidates. Zero when no candidate can pass.
    """
    if rate <= 0.0:
        return 0
    expected = settings.desired_count / rate
    return int(min(math.ceil(expected * settings.budget_factor), settings.max_candidates))


def initialize_points(settings, field, stream=None):
    """
    Place the initial stipples for a run

    Candidates are drawn uniformly over the image. A candidate is kept when its
    weight exceeds the white cutoff and a second draw falls below the weight,
    so acceptance is proportional to density. The candidate budget scales with
    the image's acceptance rate (see candidate_budget); slots still empty once
    it is spent, or straight away when no pixel can pass the cutoff, are filled
    uniformly.

    Args:
        settings: StippleSettings for the run
        field: DensityField to sample
        stream: Optional Mulberry32 stream; a new one seeded from settings.seed by default

    Returns:
        Float array [desired_count, 2] of (x, y) positions
    """
    if stream is None:
        stream = Mulberry32(settings.seed)

    width, height = field.width, field.height
    weights = field.weights(settings.polarity)
    cutoff = settings.white_cutoff
    desired = settings.desired_count

    points = []
    attempts = 0
    rate = acceptance_rate(weights, cutoff)
    budget = candidate_budget(settings, rate)
    if budget == 0:
        logger.warning("No pixel weight exceeds white cutoff %.3f, skipping rejection sampling", cutoff)
    else:
        logger.debug("Acceptance rate %.5f, candidate budget %d", rate, budget)

    while len(points) < desired and attempts < budget:
        attempts += 1
        x = stream.next() * width
        y = stream.next() * height
        weight = weights[int(y), int(x)]
        if weight > cutoff and stream.next() < weight:
            points.append((x, y))

    missing = desired - len(points)
    if missing > 0:
        logger.warning(
            "Rejection sampling placed %d/%d stipples after %d candidates, filling %d uniformly",
            len(points), desired, attempts, missing,
        )
    while len(points) < desired:
        points.append((stream.next() * width, stream.next() * height))

    logger.debug("Initialized %d stipples (seed=%d, candidates=%d)", desired, settings.seed, attempts)
    return np.array(points, dtype=np.float64).reshape(desired, 2)
