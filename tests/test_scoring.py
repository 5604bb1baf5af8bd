"""Tests for risk aggregation, recommendations and intervention selection."""

from __future__ import annotations

import pytest

from procrastination_engine.core.interventions import select_intervention
from procrastination_engine.core.scoring import (
    HIGH_RISK_PREAMBLE,
    LOW_RISK_PREAMBLE,
    MODERATE_RISK_PREAMBLE,
    SeverityWeights,
    build_recommendations,
    compute_risk_score,
    unique_interventions,
)
from procrastination_engine.domain.enums import Severity, Urgency
from procrastination_engine.domain.signal import ProcrastinationAnalysis

from tests.test_models import _signal


# ── Risk score ───────────────────────────────────────────────────────────────


class TestRiskScore:
    def test_no_signals_zero(self) -> None:
        assert compute_risk_score([]) == 0.0

    def test_single_signal_equals_its_confidence(self) -> None:
        signals = [_signal(severity=Severity.HIGH, confidence=0.8)]
        assert compute_risk_score(signals) == pytest.approx(0.8)

    def test_weighted_toward_higher_severity(self) -> None:
        signals = [
            _signal(severity=Severity.HIGH, confidence=0.8),
            _signal(severity=Severity.LOW, confidence=0.4),
        ]
        # (0.8*0.8 + 0.4*0.2) / (0.8 + 0.2)
        assert compute_risk_score(signals) == pytest.approx(0.72)

    def test_mixed_severities(self) -> None:
        signals = [
            _signal(severity=Severity.MEDIUM, confidence=0.6),
            _signal(severity=Severity.MEDIUM, confidence=0.5),
            _signal(severity=Severity.LOW, confidence=0.4),
        ]
        expected = (0.6 * 0.5 + 0.5 * 0.5 + 0.4 * 0.2) / (0.5 + 0.5 + 0.2)
        assert compute_risk_score(signals) == pytest.approx(expected)

    def test_full_confidence_reaches_one(self) -> None:
        signals = [_signal(severity=s, confidence=1.0) for s in Severity]
        assert compute_risk_score(signals) == pytest.approx(1.0)
        assert compute_risk_score(signals) <= 1.0

    def test_custom_weights(self) -> None:
        signals = [
            _signal(severity=Severity.HIGH, confidence=1.0),
            _signal(severity=Severity.LOW, confidence=0.0),
        ]
        weights = SeverityWeights(low=1.0, medium=1.0, high=1.0)
        assert compute_risk_score(signals, weights) == pytest.approx(0.5)

    def test_zero_weights_do_not_divide_by_zero(self) -> None:
        weights = SeverityWeights(low=0.0, medium=0.0, high=0.0)
        assert compute_risk_score([_signal()], weights) == 0.0


# ── Recommendations ──────────────────────────────────────────────────────────


class TestRecommendations:
    @pytest.mark.parametrize(
        "score,preamble",
        [
            (0.0, LOW_RISK_PREAMBLE),
            (0.4, LOW_RISK_PREAMBLE),
            (0.41, MODERATE_RISK_PREAMBLE),
            (0.7, MODERATE_RISK_PREAMBLE),
            (0.71, HIGH_RISK_PREAMBLE),
            (1.0, HIGH_RISK_PREAMBLE),
        ],
    )
    def test_preamble_by_band(self, score: float, preamble: tuple[str, ...]) -> None:
        assert build_recommendations([], score) == list(preamble)

    def test_preamble_sizes(self) -> None:
        assert len(HIGH_RISK_PREAMBLE) == 3
        assert len(MODERATE_RISK_PREAMBLE) == 3
        assert len(LOW_RISK_PREAMBLE) == 2

    def test_signal_interventions_deduplicated_in_order(self) -> None:
        signals = [
            _signal(suggested_intervention="A"),
            _signal(suggested_intervention="B"),
            _signal(suggested_intervention="A"),
            _signal(suggested_intervention="C"),
            _signal(suggested_intervention="D"),
        ]
        recs = build_recommendations(signals, 0.5)
        assert recs == list(MODERATE_RISK_PREAMBLE) + ["A", "B", "C"]

    def test_fewer_than_three_interventions(self) -> None:
        signals = [_signal(suggested_intervention="A"), _signal(suggested_intervention="A")]
        assert build_recommendations(signals, 0.1) == list(LOW_RISK_PREAMBLE) + ["A"]

    def test_unique_interventions(self) -> None:
        signals = [_signal(suggested_intervention=x) for x in "CABAC"]
        assert unique_interventions(signals) == ["C", "A", "B"]


# ── Interventions ────────────────────────────────────────────────────────────


class TestInterventionSelection:
    def test_high_severity_forces_high_bundle(self) -> None:
        analysis = ProcrastinationAnalysis(
            risk_score=0.1,
            signals=[_signal(severity=Severity.HIGH, confidence=0.1)],
        )
        intervention = select_intervention(analysis)
        assert intervention.urgency == Urgency.HIGH
        assert "Alert" in intervention.title

    def test_high_score_gives_high_bundle(self) -> None:
        analysis = ProcrastinationAnalysis(risk_score=0.75, signals=[_signal(confidence=0.75)])
        assert select_intervention(analysis).urgency == Urgency.HIGH

    def test_medium_bundle(self) -> None:
        analysis = ProcrastinationAnalysis(risk_score=0.5, signals=[_signal()])
        intervention = select_intervention(analysis)
        assert intervention.urgency == Urgency.MEDIUM
        assert "Set a 15-minute timer" in intervention.actions

    def test_low_bundle(self) -> None:
        intervention = select_intervention(ProcrastinationAnalysis(risk_score=0.0))
        assert intervention.urgency == Urgency.LOW
        assert intervention.title == "💪 Keep Going!"

    @pytest.mark.parametrize("score", [0.0, 0.5, 0.9])
    def test_every_bundle_has_four_actions(self, score: float) -> None:
        intervention = select_intervention(ProcrastinationAnalysis(risk_score=score))
        assert len(intervention.actions) == 4

    def test_returned_bundle_is_not_shared(self) -> None:
        first = select_intervention(ProcrastinationAnalysis(risk_score=0.0))
        first.actions.append("Nap")
        second = select_intervention(ProcrastinationAnalysis(risk_score=0.0))
        assert "Nap" not in second.actions
