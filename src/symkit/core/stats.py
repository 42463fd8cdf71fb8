from __future__ import annotations

import dataclasses
import json
from collections import defaultdict
from typing import Any, Dict, List

from .logging import getLogger

logger = getLogger(__name__)


@dataclasses.dataclass
class RewriteStatistics:
    """Counts how often each rewrite rule fired during simplification.

    One instance is owned by a Simplifier; tests use the query helpers to
    assert which rules took part in a rewrite.
    """

    rule_usage: Dict[str, int] = dataclasses.field(
        default_factory=lambda: defaultdict(int)
    )
    folds: int = 0
    passes: int = 0
    execution_log: List[str] = dataclasses.field(default_factory=list)

    def reset(self) -> None:
        self.rule_usage.clear()
        self.folds = 0
        self.passes = 0
        self.execution_log.clear()

    def record_rule_fired(self, rule_name: str) -> None:
        self.rule_usage[rule_name] += 1
        self.execution_log.append(rule_name)

    def record_fold(self) -> None:
        self.folds += 1

    def record_pass(self) -> None:
        self.passes += 1

    def get_rule_match_count(self, rule: type | str) -> int:
        name = rule if isinstance(rule, str) else rule.__name__
        return self.rule_usage.get(name, 0)

    def did_rule_fire(self, rule: type | str) -> bool:
        return self.get_rule_match_count(rule) > 0

    def get_fired_rule_names(self) -> List[str]:
        return [name for name, count in self.rule_usage.items() if count]

    def report(self) -> None:
        if not self.rule_usage and not self.folds:
            logger.info("No rewrite rule fired")
            return
        for name, count in sorted(self.rule_usage.items()):
            logger.info("Rule %s fired %d times", name, count)
        logger.info("%d constant folds over %d passes", self.folds, self.passes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_matches": dict(self.rule_usage),
            "folds": self.folds,
            "passes": self.passes,
            "total_rule_firings": len(self.execution_log),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)
