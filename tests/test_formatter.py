"""Tests for risk banding and the plain-text analysis formatter."""

from __future__ import annotations

import pytest

from procrastination_engine.core.interventions import select_intervention
from procrastination_engine.domain.enums import RiskLevel, Severity, SignalType
from procrastination_engine.domain.signal import ProcrastinationAnalysis
from procrastination_engine.explain.formatter import AnalysisFormatter, risk_level

from tests.test_models import _signal


class TestRiskLevel:
    @pytest.mark.parametrize(
        "score,level",
        [
            (0.0, RiskLevel.LOW),
            (0.4, RiskLevel.LOW),
            (0.41, RiskLevel.MODERATE),
            (0.7, RiskLevel.MODERATE),
            (0.71, RiskLevel.HIGH),
        ],
    )
    def test_bands(self, score: float, level: RiskLevel) -> None:
        assert risk_level(score) == level


class TestFormatPlain:
    def _render(self, analysis: ProcrastinationAnalysis) -> str:
        return AnalysisFormatter.format_plain(analysis, select_intervention(analysis))

    def test_low_risk_output(self) -> None:
        analysis = ProcrastinationAnalysis(
            risk_score=0.0,
            recommendations=["Keep up the good work", "Stay consistent"],
        )
        text = self._render(analysis)
        lines = text.splitlines()
        assert lines[0] == "💪 Keep Going!"
        assert lines[1] == "=" * 50
        assert lines[2] == "Procrastination risk: 0% (LOW)"
        assert "Intervention recommended" not in text
        assert "--- Signals (0 detected) ---" in text

    def test_high_risk_output(self) -> None:
        signal = _signal(
            signal_type=SignalType.EMOTIONAL,
            severity=Severity.HIGH,
            confidence=0.8,
            description="Feeling overwhelmed",
        )
        analysis = ProcrastinationAnalysis(
            risk_score=0.8,
            signals=[signal],
            recommendations=["one", "two", "three", "four", "five"],
            intervention_needed=True,
        )
        text = self._render(analysis)
        assert "Procrastination risk: 80% (HIGH)" in text
        assert "Intervention recommended" in text
        assert "  • four" in text
        assert "five" not in text
        assert "  [high] emotional (80%): Feeling overwhelmed" in text

    def test_actions_rendered_as_checklist(self) -> None:
        analysis = ProcrastinationAnalysis(risk_score=0.5, signals=[_signal()])
        intervention = select_intervention(analysis)
        text = AnalysisFormatter.format_plain(analysis, intervention)
        for action in intervention.actions:
            assert f"  [ ] {action}" in text
        assert intervention.message in text
