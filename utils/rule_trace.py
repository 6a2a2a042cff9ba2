# rule_trace.py

import logging
import matplotlib.pyplot as plt
from typing import List, NamedTuple, Optional, Tuple

from fis.context import EvaluationContext
from fis.engine import InferenceEngine

rule_engine_log = logging.getLogger("rule_engine")


class RuleTrace(NamedTuple):
    """Evaluation record of one rule."""

    rule_index: int
    antecedents: Tuple[Tuple[str, float], ...]
    consequent: Optional[str]
    firing_strength: float


def trace_rules(
    engine: InferenceEngine,
    context: EvaluationContext,
    output_group: Optional[int] = None,
    active_only: bool = False,
) -> List[RuleTrace]:
    """
    Evaluate each rule and return detailed trace information per rule,
    including antecedent degrees and firing strength.

    Args:
        engine: The engine whose rules are traced.
        context: Context holding the degrees of the most recent fuzzification.
        output_group: Report the consequent of this output group only; rules
            without a consequent in it are skipped.
        active_only: Skip rules that do not fire.

    Returns:
        A list of RuleTrace records, in rule order.
    """
    strengths = engine.rule_engine.evaluate(context)
    traces = []
    for i, (rule, w) in enumerate(zip(engine.rules, strengths)):
        if active_only and w == 0:
            continue
        if output_group is None:
            consequent = " AND ".join(rule.consequent_names)
        else:
            mf = rule.consequent_for(output_group)
            if mf is None:
                continue
            consequent = mf.name
        antecedents = tuple((name, context.degree(name)) for name in rule.antecedent_names)
        traces.append(RuleTrace(i, antecedents, consequent, w))
        rule_engine_log.info(
            "Rule# %d %s -> %s W= %.3f",
            i,
            ", ".join(f"{n}={d:.3f}" for n, d in antecedents),
            consequent,
            w,
        )
    return traces


def plot_rule_contributions(traces: List[RuleTrace], title: str = "", show: bool = True):
    """Bar chart of the firing strength of each traced rule."""
    labels = [f"#{t.rule_index} {t.consequent}" for t in traces]
    ws = [t.firing_strength for t in traces]

    fig, ax = plt.subplots(figsize=(12, 6))
    bars = ax.bar(range(len(labels)), ws, color="blue", alpha=0.7)
    ax.set_ylabel("Firing Strength")
    ax.set_ylim(0.0, 1.05)
    ax.set_xticks(range(len(labels)))
    ax.set_xticklabels(labels, rotation=45, ha="right")

    # Annotate W values on top of bars
    for bar in bars:
        height = bar.get_height()
        if height > 0:
            ax.text(
                bar.get_x() + bar.get_width() / 2,
                height + 0.01,
                f"{height:.2f}",
                ha="center",
                va="bottom",
                fontsize=8,
                color="black",
            )

    ax.set_title(f"Rule Firing Strengths {title}".strip())
    fig.tight_layout()
    if show:
        plt.show()
    return fig
