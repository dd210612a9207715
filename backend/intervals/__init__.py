"""
Interval Inference

Decides whether a timeline reads in weeks, months, quarters or years.

- rules.py      : single ranked rule list (shared)
- classifier.py : text -> IntervalEstimate (+ prompt hint)
- reconcile.py  : realign a validated Timeline with explicit durations
"""

from .rules import IntervalEstimate, RANKED_RULES, DEFAULT_ESTIMATE, evaluate
from .classifier import classify, classify_inputs, combine_inputs, describe_hint
from .reconcile import reconcile, rescale

__all__ = [
    'IntervalEstimate', 'RANKED_RULES', 'DEFAULT_ESTIMATE', 'evaluate',
    'classify', 'classify_inputs', 'combine_inputs', 'describe_hint',
    'reconcile', 'rescale',
]
