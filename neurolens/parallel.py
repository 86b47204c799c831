# neurolens/parallel.py
"""
Parallel scoring of independent subject streams.

Each subject owns its scorer and alert monitor, so streams share no state
and can be scored in separate joblib workers. Results are identical to the
sequential path.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from joblib import Parallel, delayed

from .alerts import CognitiveAlertMonitor
from .config import NeuroLensConfiguration
from .domain.events import AlertEvent
from .domain.scores import ScoredPoint
from .io import TimedFeatures
from .scoring.cognitive import CognitiveScorer

logger = logging.getLogger(__name__)


@dataclass
class SubjectScores:
    """Scored stream of one subject."""

    subject: str
    points: List[ScoredPoint] = field(default_factory=list)
    alerts: List[AlertEvent] = field(default_factory=list)


def score_stream(
    subject: str,
    stream: Sequence[TimedFeatures],
    config: Optional[NeuroLensConfiguration] = None,
) -> SubjectScores:
    """Score one subject's (timestamp, features) stream sequentially."""
    cfg = config or NeuroLensConfiguration()
    scorer = CognitiveScorer(cfg.scorer)
    monitor = CognitiveAlertMonitor([cfg.stress_alert, cfg.attention_alert])
    result = SubjectScores(subject=subject)
    for timestamp, features in stream:
        point = scorer.update(features, timestamp)
        result.points.append(point)
        result.alerts.extend(monitor.observe(point))
    return result


def score_subjects(
    streams: Mapping[str, Sequence[TimedFeatures]],
    n_jobs: int = 1,
    config: Optional[NeuroLensConfiguration] = None,
) -> Dict[str, SubjectScores]:
    """
    Score many subjects, in parallel when ``n_jobs`` != 1.

    Args:
        streams: subject -> list of (timestamp, FeatureVector)
        n_jobs: joblib worker count (-1 = all cores)
        config: shared configuration; every subject gets fresh state

    Returns:
        subject -> SubjectScores, in the order of ``streams``
    """
    if n_jobs == 0:
        raise ValueError("n_jobs must not be 0.")
    subjects = list(streams)
    logger.info("Scoring %d subject(s) with n_jobs=%d", len(subjects), n_jobs)
    results = Parallel(n_jobs=n_jobs)(
        delayed(score_stream)(subject, streams[subject], config) for subject in subjects
    )
    return {r.subject: r for r in results}
