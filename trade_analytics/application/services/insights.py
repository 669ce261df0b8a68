"""Insight Generator: Threshold rules over performance metrics.

Each rule inspects one metric and, when its threshold is crossed,
emits a PerformanceInsight with a fixed confidence and recommendation.
Insights are emitted in rule order:

    1. Win rate          (> 0.6 positive, < 0.4 negative)
    2. Sharpe ratio      (> 1.0 positive, < 0.5 negative)
    3. Emotional control (> 0.7 positive, < 0.3 negative)
    4. Market timing     (> 0.1 positive)
"""

from dataclasses import dataclass, field
from typing import Callable, Literal

from trade_analytics.application.services.performance import AdvancedPerformanceMetrics

InsightType = Literal["performance", "risk", "behavioral", "factor"]
Impact = Literal["positive", "negative", "neutral"]


@dataclass(frozen=True, slots=True)
class PerformanceInsight:
    """A rule-derived statement about performance.

    Attributes:
        type: Metric family the insight is about
        title: Short headline
        description: One-sentence explanation with the metric value
        impact: Whether the finding is good or bad news
        confidence: Fixed rule confidence, 0-100
        recommendation: Suggested action, if any
        metrics: The metric values that triggered the rule
    """
    type: InsightType
    title: str
    description: str
    impact: Impact
    confidence: int
    recommendation: str | None = None
    metrics: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "confidence": self.confidence,
            "recommendation": self.recommendation,
            "metrics": dict(self.metrics),
        }


Rule = Callable[[AdvancedPerformanceMetrics], PerformanceInsight | None]


# =============================================================================
# Rules
# =============================================================================

def _win_rate_rule(m: AdvancedPerformanceMetrics) -> PerformanceInsight | None:
    win_rate = m.basic.win_rate
    if win_rate > 0.6:
        return PerformanceInsight(
            type="performance",
            title="Strong Win Rate",
            description=(
                f"Your win rate of {win_rate * 100:.1f}% is above average, "
                "indicating good trade selection."
            ),
            impact="positive",
            confidence=80,
            recommendation=(
                "Continue focusing on high-probability setups and maintain "
                "your current selection criteria."
            ),
            metrics={"win_rate": win_rate},
        )
    if win_rate < 0.4:
        return PerformanceInsight(
            type="performance",
            title="Low Win Rate",
            description=(
                f"Your win rate of {win_rate * 100:.1f}% suggests room for "
                "improvement in trade selection."
            ),
            impact="negative",
            confidence=70,
            recommendation=(
                "Review your entry criteria and consider tightening your "
                "selection process."
            ),
            metrics={"win_rate": win_rate},
        )
    return None


def _sharpe_rule(m: AdvancedPerformanceMetrics) -> PerformanceInsight | None:
    ratio = m.risk.sharpe_ratio
    if ratio > 1.0:
        return PerformanceInsight(
            type="risk",
            title="Excellent Risk-Adjusted Returns",
            description=(
                f"Your Sharpe ratio of {ratio:.2f} indicates excellent "
                "risk-adjusted performance."
            ),
            impact="positive",
            confidence=90,
            recommendation=(
                "Your risk management is working well. Consider scaling up "
                "position sizes gradually."
            ),
            metrics={"sharpe_ratio": ratio},
        )
    if ratio < 0.5:
        return PerformanceInsight(
            type="risk",
            title="Poor Risk-Adjusted Returns",
            description=(
                f"Your Sharpe ratio of {ratio:.2f} suggests poor "
                "risk-adjusted performance."
            ),
            impact="negative",
            confidence=80,
            recommendation=(
                "Focus on improving risk management and reducing position "
                "sizes during volatile periods."
            ),
            metrics={"sharpe_ratio": ratio},
        )
    return None


def _emotional_control_rule(m: AdvancedPerformanceMetrics) -> PerformanceInsight | None:
    control = m.behavioral.emotional_control
    if control > 0.7:
        return PerformanceInsight(
            type="behavioral",
            title="Good Emotional Control",
            description=(
                "Your trading shows consistent emotional control with low "
                "performance variance."
            ),
            impact="positive",
            confidence=80,
            recommendation=(
                "Maintain your disciplined approach and avoid emotional "
                "decision-making."
            ),
            metrics={"emotional_control": control},
        )
    if control < 0.3:
        return PerformanceInsight(
            type="behavioral",
            title="Emotional Trading Detected",
            description=(
                "Your trading shows high variance, suggesting emotional "
                "decision-making."
            ),
            impact="negative",
            confidence=70,
            recommendation=(
                "Implement strict trading rules and consider using a trading "
                "journal to track emotions."
            ),
            metrics={"emotional_control": control},
        )
    return None


def _market_timing_rule(m: AdvancedPerformanceMetrics) -> PerformanceInsight | None:
    timing = m.factors.market_timing
    if timing > 0.1:
        return PerformanceInsight(
            type="factor",
            title="Strong Market Timing",
            description=(
                "Your market timing skills are contributing positively to "
                "performance."
            ),
            impact="positive",
            confidence=70,
            recommendation=(
                "Continue monitoring market conditions and timing your "
                "entries carefully."
            ),
            metrics={"market_timing": timing},
        )
    return None


DEFAULT_RULES: tuple[Rule, ...] = (
    _win_rate_rule,
    _sharpe_rule,
    _emotional_control_rule,
    _market_timing_rule,
)


# =============================================================================
# Generator
# =============================================================================

class InsightGenerator:
    """Maps metrics to insights through an ordered list of rules.

    Example:
        >>> insights = InsightGenerator().generate(metrics)
        >>> [i.title for i in insights]
        ['Strong Win Rate', 'Excellent Risk-Adjusted Returns']
    """

    def __init__(self, rules: tuple[Rule, ...] = DEFAULT_RULES):
        self._rules = rules

    def generate(self, metrics: AdvancedPerformanceMetrics) -> list[PerformanceInsight]:
        """Evaluate every rule in order and collect the insights they emit."""
        insights = []
        for rule in self._rules:
            insight = rule(metrics)
            if insight is not None:
                insights.append(insight)
        return insights
