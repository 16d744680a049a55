"""
proplint/config.py
══════════════════

Analysis configuration and the wiring it controls.

:class:`AnalysisConfig` collects every knob the command line exposes and
turns itself into a ready :class:`CheckerRunner`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from proplint.checkers import (
    CheckerRegistry,
    CheckerRunner,
    SuppressionManager,
    default_registry,
)
from proplint.errors import ConfigurationError, ErrorCodes
from proplint.macros import MacroResolver
from proplint.oracle import TypeAliasOracle

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("gcc", "json", "summary")


def _is_identifier(name: str) -> bool:
    return bool(name) and name.replace("$", "_").isidentifier()


@dataclass
class AnalysisConfig:
    """Tuning knobs for one analysis run."""
    rules: Optional[List[str]] = None       # None = every registered rule
    suppress: List[str] = field(default_factory=list)
    define_props: List[str] = field(default_factory=lambda: ["defineProps"])
    with_defaults: List[str] = field(default_factory=lambda: ["withDefaults"])
    define_model: List[str] = field(default_factory=lambda: ["defineModel"])
    inline_directives: bool = True
    output_format: str = "gcc"

    def validate(self, registry: Optional[CheckerRegistry] = None) -> List[str]:
        """Return a list of validation problems (empty if valid)."""
        registry = registry or default_registry()
        problems: List[str] = []
        for rule in self.rules or ():
            if registry.get_by_name(rule) is None:
                problems.append(
                    f"unknown rule {rule!r} (known: {', '.join(registry.names)})"
                )
        if self.output_format not in OUTPUT_FORMATS:
            problems.append(f"unknown output format {self.output_format!r}")
        for name in self.define_props + self.with_defaults + self.define_model:
            if not _is_identifier(name):
                problems.append(f"macro name {name!r} is not an identifier")
        return problems

    def check(self, registry: Optional[CheckerRegistry] = None) -> "AnalysisConfig":
        """
        Raise on the first validation problem.

        Raises:
            ConfigurationError: with the code matching the problem kind
        """
        problems = self.validate(registry)
        if not problems:
            return self
        first = problems[0]
        if first.startswith("unknown rule"):
            code = ErrorCodes.UNKNOWN_RULE
        elif first.startswith("unknown output format"):
            code = ErrorCodes.INVALID_FORMAT
        else:
            code = ErrorCodes.INVALID_MACRO_NAME
        for extra in problems[1:]:
            logger.warning("AnalysisConfig: %s", extra)
        raise ConfigurationError(first, code=code)

    def make_resolver(self) -> MacroResolver:
        return MacroResolver(
            define_props=tuple(self.define_props),
            with_defaults=tuple(self.with_defaults),
            define_model=tuple(self.define_model),
        )

    def make_suppressions(self) -> SuppressionManager:
        sm = SuppressionManager()
        for key in self.suppress:
            sm.add_global_suppression(key)
        return sm

    def make_runner(
        self,
        registry: Optional[CheckerRegistry] = None,
        oracle: Optional[TypeAliasOracle] = None,
    ) -> CheckerRunner:
        """Build a runner honoring this configuration."""
        return CheckerRunner(
            registry=registry,
            suppressions=self.make_suppressions(),
            resolver=self.make_resolver(),
            oracle=oracle,
            inline_directives=self.inline_directives,
        )


__all__ = [
    "OUTPUT_FORMATS",
    "AnalysisConfig",
]
