"""
proplint/checkers.py
════════════════════

Checker framework and the two prop-declaration checks.

This is the "last mile" module: it turns the normalized ``PropEntry``
lists built by :mod:`proplint.entries` into diagnostics.

Architecture
────────────

  ┌─────────────────────────────────────────────────────────┐
  │                   CheckerRunner                         │
  │                                                         │
  │  find_component_descriptions ──► PropEntryBuilder       │
  │                                        │                │
  │                          ┌─────────────┴────────────┐   │
  │                  ┌───────▼────────┐   ┌─────────────▼─┐ │
  │                  │  Specificity   │   │ Compatibility │ │
  │                  │    Checker     │   │    Checker    │ │
  │                  └───────┬────────┘   └───────┬───────┘ │
  │                          │                    │         │
  │  ┌───────────────────────▼────────────────────▼──────┐  │
  │  │           SuppressionManager                      │  │
  │  │  eslint-disable-line │ eslint-disable-next-line   │  │
  │  │  file-level │ global (command line / config)      │  │
  │  └──────────────────────────┬────────────────────────┘  │
  │                             │                           │
  │  ┌──────────────────────────▼────────────────────────┐  │
  │  │        Diagnostic Formatter (JSON / GCC text)     │  │
  │  └───────────────────────────────────────────────────┘  │
  └─────────────────────────────────────────────────────────┘

Each Checker follows a four-phase lifecycle:

  1. **configure()**        — read options
  2. **collect_evidence()** — pick the entries / defaults to examine
  3. **diagnose()**         — decide which of them are violations
  4. **report()**           — emit Diagnostics (filtered by suppressions)

Both checks consume the same immutable entry list and never see each
other's output.

License: MIT
"""

from __future__ import annotations

import json
import logging
import re
import time
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from fnmatch import fnmatch
from pathlib import Path
from typing import (
    Any,
    ClassVar,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Optional,
    Sequence,
    Set,
    Tuple,
    Type,
    Union,
)

from proplint.components import find_component_descriptions
from proplint.entries import PropDefault, PropEntry, PropEntryBuilder
from proplint.estree import Node, load_tree, node_filename, skip_wrappers
from proplint.inference import DefaultValueInferencer, ValueType
from proplint.locator import DeclarationLocator
from proplint.macros import MacroResolver
from proplint.oracle import ProgramTypeOracle, TypeAliasOracle
from proplint.type_tags import (
    FUNCTION,
    REFERENCE_TAGS,
    TagSet,
    builtin_tags,
    format_tag_list,
    union_tags,
)

logger = logging.getLogger(__name__)

RULE_PREFIX = "vue/"


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — DIAGNOSTIC MODEL
# ═════════════════════════════════════════════════════════════════════════

class DiagnosticSeverity(Enum):
    """Severity levels, ordered from most to least severe."""
    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"


@dataclass(frozen=True)
class SourceLocation:
    """A specific point in source code (1-based line and column)."""
    file: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        if self.column:
            return f"{self.file}:{self.line}:{self.column}"
        return f"{self.file}:{self.line}"

    @classmethod
    def of(cls, node: Optional[Node]) -> "SourceLocation":
        if node is None:
            return cls()
        return cls(file=node_filename(node), line=node.line, column=node.column)


@dataclass(frozen=True)
class Diagnostic:
    """
    A single diagnostic finding.

    Attributes
    ----------
    error_id     : Unique identifier (e.g., "requirePropTypes")
    message      : Human-readable description
    severity     : DiagnosticSeverity
    location     : Primary source location
    checker_name : Rule that produced this (e.g., "require-prop-types")
    extra        : Additional context string
    evidence     : Machine-readable evidence dict for downstream tooling
    """
    error_id: str
    message: str
    severity: DiagnosticSeverity
    location: SourceLocation
    checker_name: str = ""
    extra: str = ""
    evidence: Dict[str, Any] = field(default_factory=dict)

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize to a flat JSON object."""
        result: Dict[str, Any] = {
            "file": self.location.file,
            "line": self.location.line,
            "column": self.location.column,
            "severity": self.severity.value,
            "message": self.message,
            "ruleId": self.checker_name,
            "errorId": self.error_id,
        }
        if self.extra:
            result["extra"] = self.extra
        return result

    def to_json_str(self) -> str:
        """Single-line JSON string."""
        return json.dumps(self.to_json_dict())

    def to_gcc_format(self) -> str:
        """GCC-style diagnostic string: file:line:col: severity: message."""
        sev = self.severity.value
        return f"{self.location}: {sev}: {self.message} [{self.checker_name}]"


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — SUPPRESSION MANAGER
# ═════════════════════════════════════════════════════════════════════════

_DIRECTIVE_RE = re.compile(
    r"^\s*(eslint-disable-line|eslint-disable-next-line)\b(?P<rules>.*)$",
    re.DOTALL,
)


def _normalize_rule(name: str) -> str:
    name = name.strip()
    if name.startswith(RULE_PREFIX):
        return name[len(RULE_PREFIX):]
    return name


def _parse_rule_list(text: str) -> Set[str]:
    """``" vue/a, b -- why"`` → ``{"a", "b"}``; no list means all rules."""
    text = text.split("--", 1)[0]
    rules = {_normalize_rule(r) for r in text.split(",") if r.strip()}
    return rules or {"*"}


class SuppressionManager:
    """
    Manages diagnostic suppressions from multiple sources.

    Sources:
      1. Inline comments:  ``// eslint-disable-line vue/require-prop-types``
         and ``// eslint-disable-next-line``
      2. File-level suppressions (passed programmatically)
      3. Global suppressions (command-line or config)

    Suppression keys are rule names (``require-prop-types``, with or
    without the ``vue/`` prefix) or error ids (``requirePropTypes``).

    Usage
    -----
    >>> sm = SuppressionManager()
    >>> sm.load_inline_suppressions(program)
    >>> sm.add_file_suppression("require-prop-types", "legacy/*.vue")
    >>> sm.add_global_suppression("requireValidDefaultProp")
    >>> if not sm.is_suppressed(diagnostic):
    ...     emit(diagnostic)
    """

    def __init__(self) -> None:
        # {(file, line)} → set of rule names suppressed at that location
        self._inline: Dict[Tuple[str, int], Set[str]] = defaultdict(set)
        # file pattern → set of rule names / error ids
        self._file_level: Dict[str, Set[str]] = defaultdict(set)
        # globally suppressed rule names / error ids
        self._global: Set[str] = set()

    def load_inline_suppressions(self, program: Optional[Node]) -> int:
        """
        Read ``eslint-disable-line`` / ``eslint-disable-next-line``
        directives from the program's ``comments`` array.

        Returns:
            Number of directives found
        """
        if program is None:
            return 0
        file = node_filename(program)
        count = 0
        for comment in program.comments or []:
            if not isinstance(comment, Node) or not isinstance(comment.value, str):
                continue
            match = _DIRECTIVE_RE.match(comment.value)
            if match is None:
                continue
            rules = _parse_rule_list(match.group("rules"))
            loc = comment.loc or {}
            if match.group(1) == "eslint-disable-line":
                line = int((loc.get("start") or {}).get("line", 0) or 0)
            else:
                line = int((loc.get("end") or {}).get("line", 0) or 0) + 1
            if line:
                self._inline[(file, line)].update(rules)
                count += 1
        logger.debug("loaded %d inline suppression directive(s)", count)
        return count

    def copy(self) -> "SuppressionManager":
        """An independent manager holding the same suppressions."""
        other = SuppressionManager()
        for location, rules in self._inline.items():
            other._inline[location] = set(rules)
        for pattern, keys in self._file_level.items():
            other._file_level[pattern] = set(keys)
        other._global = set(self._global)
        return other

    def add_file_suppression(self, key: str, file_pattern: str) -> None:
        """Suppress ``key`` in files matching ``file_pattern``."""
        self._file_level[file_pattern].add(_normalize_rule(key))

    def add_global_suppression(self, key: str) -> None:
        """Globally suppress ``key``."""
        self._global.add(_normalize_rule(key))

    @staticmethod
    def _matches(keys: Set[str], diag: Diagnostic) -> bool:
        return "*" in keys or diag.error_id in keys or diag.checker_name in keys

    def is_suppressed(self, diag: Diagnostic) -> bool:
        """Check whether a diagnostic should be suppressed."""
        if self._matches(self._global, diag):
            return True

        loc = diag.location
        if self._matches(self._inline.get((loc.file, loc.line), set()), diag):
            return True

        for pattern, keys in self._file_level.items():
            if not self._matches(keys, diag):
                continue
            if pattern == loc.file or loc.file.endswith(pattern) \
                    or fnmatch(loc.file, pattern):
                return True

        return False

    def filter_diagnostics(
        self, diagnostics: Iterable[Diagnostic]
    ) -> List[Diagnostic]:
        """Return only non-suppressed diagnostics."""
        return [d for d in diagnostics if not self.is_suppressed(d)]


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — CHECKER BASE CLASS
# ═════════════════════════════════════════════════════════════════════════

@dataclass
class CheckerContext:
    """
    Shared context passed to every checker during execution.

    Attributes
    ----------
    entries      : PropEntry objects of every component, in source order
    program      : root of the analyzed tree (may be ``None`` when the
                   runner is handed a single description)
    suppressions : SuppressionManager
    inferencer   : default-value inferencer shared by the checkers
    options      : user-provided options dict
    stats        : mutable dict for timing / counting statistics
    """
    entries: List[PropEntry]
    program: Optional[Node] = None
    suppressions: SuppressionManager = field(default_factory=SuppressionManager)
    inferencer: DefaultValueInferencer = field(default_factory=DefaultValueInferencer)
    options: Dict[str, Any] = field(default_factory=dict)
    stats: Dict[str, Any] = field(default_factory=dict)


class Checker(ABC):
    """
    Abstract base class for all checkers.

    Lifecycle
    ─────────
      1. ``configure(ctx)``        — receive context, read options
      2. ``collect_evidence(ctx)`` — select what to examine
      3. ``diagnose(ctx)``         — turn evidence into diagnostics
      4. ``report(ctx)``           — yield final diagnostics

    Subclass Contract
    ─────────────────
      - Override ``name``, ``description``, ``error_ids``
      - Implement ``collect_evidence()`` and ``diagnose()``
      - Optionally override ``configure()`` for custom setup
    """

    # ── Metadata (override in subclasses) ────────────────────────────

    name: ClassVar[str] = "base-checker"
    description: ClassVar[str] = ""
    error_ids: ClassVar[FrozenSet[str]] = frozenset()
    default_severity: ClassVar[DiagnosticSeverity] = DiagnosticSeverity.WARNING

    def __init__(self) -> None:
        self._diagnostics: List[Diagnostic] = []

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    def configure(self, ctx: CheckerContext) -> None:
        """
        Called before evidence collection.

        Default implementation does nothing.
        """
        pass

    @abstractmethod
    def collect_evidence(self, ctx: CheckerContext) -> None:
        """Select the entries and defaults this checker examines."""
        ...

    @abstractmethod
    def diagnose(self, ctx: CheckerContext) -> None:
        """
        Correlate evidence into Diagnostic objects.

        Append diagnostics to ``self._diagnostics`` via :meth:`_emit`.
        """
        ...

    def report(self, ctx: CheckerContext) -> List[Diagnostic]:
        """
        Return final diagnostics, filtered by suppressions.

        Normally you don't need to override this.
        """
        return ctx.suppressions.filter_diagnostics(self._diagnostics)

    def _emit(
        self,
        error_id: str,
        message: str,
        node: Optional[Node],
        severity: Optional[DiagnosticSeverity] = None,
        extra: str = "",
        evidence: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Helper to create and store a diagnostic located at ``node``."""
        self._diagnostics.append(Diagnostic(
            error_id=error_id,
            message=message,
            severity=severity or self.default_severity,
            location=SourceLocation.of(node),
            checker_name=self.name,
            extra=extra,
            evidence=evidence or {},
        ))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} '{self.name}'>"


# ═════════════════════════════════════════════════════════════════════════
#  PART 4 — CHECKER REGISTRY
# ═════════════════════════════════════════════════════════════════════════

class CheckerRegistry:
    """
    Registry of available checkers with discovery and filtering.

    Usage
    -----
    >>> registry = CheckerRegistry()
    >>> registry.register(SpecificityChecker)
    >>> registry.register(CompatibilityChecker)
    >>> checkers = registry.get_enabled()
    >>> checkers = registry.filter_by_error_id("requirePropTypes")
    """

    def __init__(self) -> None:
        self._checkers: Dict[str, Type[Checker]] = {}
        self._disabled: Set[str] = set()

    def register(self, checker_cls: Type[Checker]) -> None:
        """Register a checker class."""
        self._checkers[checker_cls.name] = checker_cls

    def unregister(self, name: str) -> None:
        """Remove a checker by name."""
        self._checkers.pop(_normalize_rule(name), None)

    def disable(self, name: str) -> None:
        """Disable a registered checker."""
        self._disabled.add(_normalize_rule(name))

    def enable(self, name: str) -> None:
        """Re-enable a disabled checker."""
        self._disabled.discard(_normalize_rule(name))

    def get_all(self) -> List[Type[Checker]]:
        """Return all registered checker classes."""
        return list(self._checkers.values())

    def get_enabled(self) -> List[Type[Checker]]:
        """Return only enabled checker classes."""
        return [
            cls for name, cls in self._checkers.items()
            if name not in self._disabled
        ]

    def get_by_name(self, name: str) -> Optional[Type[Checker]]:
        return self._checkers.get(_normalize_rule(name))

    def filter_by_error_id(self, error_id: str) -> List[Type[Checker]]:
        """Return checkers that can produce the given error_id."""
        return [
            cls for cls in self._checkers.values()
            if error_id in cls.error_ids
        ]

    @property
    def names(self) -> List[str]:
        return sorted(self._checkers.keys())


# ═════════════════════════════════════════════════════════════════════════
#  PART 5 — PROP DECLARATION CHECKERS
# ═════════════════════════════════════════════════════════════════════════

# ─────────────────────────────────────────────────────────────────────────
#  5.1  Specificity: every prop declares a type
# ─────────────────────────────────────────────────────────────────────────

class SpecificityChecker(Checker):
    """
    Flags props that declare neither a type nor a validator.

    ``props: ['foo']``, ``foo: {}`` and ``foo: { type: [] }`` are flagged;
    ``foo: { validator: v => true }`` is not.  A declared type that cannot
    be resolved counts as declared.
    """

    name: ClassVar[str] = "require-prop-types"
    description: ClassVar[str] = "Require type definitions in props"
    error_ids: ClassVar[FrozenSet[str]] = frozenset({"requirePropTypes"})
    default_severity: ClassVar[DiagnosticSeverity] = DiagnosticSeverity.WARNING

    def __init__(self) -> None:
        super().__init__()
        self._untyped: List[PropEntry] = []

    def collect_evidence(self, ctx: CheckerContext) -> None:
        self._untyped = [
            entry for entry in ctx.entries
            if not entry.has_declared_type and not entry.has_validator
        ]

    def diagnose(self, ctx: CheckerContext) -> None:
        for entry in self._untyped:
            self._emit(
                error_id="requirePropTypes",
                message=f"Prop '{entry.name}' should define at least its type.",
                node=entry.source_node,
                evidence={"prop": entry.name, "shape": entry.shape.value},
            )


# ─────────────────────────────────────────────────────────────────────────
#  5.2  Compatibility: defaults match the declared type
# ─────────────────────────────────────────────────────────────────────────

def factory_expected_tags(declared: TagSet) -> TagSet:
    """Declared tags with reference types rendered as ``function``."""
    return union_tags(
        FUNCTION if tag in REFERENCE_TAGS else tag for tag in declared
    )


@dataclass(frozen=True)
class DefaultEvidence:
    """One default value to examine, with its inferred type."""
    entry: PropEntry
    declared: TagSet
    default: PropDefault
    inferred: ValueType


class CompatibilityChecker(Checker):
    """
    Flags default values whose type contradicts the declared type.

    Reference types (``Object``, ``Array``, ``Function``) need a factory
    function as default; for those, the values the factory returns are
    checked instead.  Custom constructor types are not checked, and any
    default whose type cannot be inferred is accepted.
    """

    name: ClassVar[str] = "require-valid-default-prop"
    description: ClassVar[str] = "Enforce props default values to be valid"
    error_ids: ClassVar[FrozenSet[str]] = frozenset({"requireValidDefaultProp"})
    default_severity: ClassVar[DiagnosticSeverity] = DiagnosticSeverity.ERROR

    def __init__(self) -> None:
        super().__init__()
        self._evidence: List[DefaultEvidence] = []

    def collect_evidence(self, ctx: CheckerContext) -> None:
        self._evidence = []
        for entry in ctx.entries:
            declared = builtin_tags(entry.declared_types)
            if not declared or entry.type_indeterminate:
                continue
            for default in entry.defaults:
                inferred = ctx.inferencer.infer(default.expression)
                if inferred is None:
                    continue
                self._evidence.append(DefaultEvidence(entry, declared, default, inferred))

    def diagnose(self, ctx: CheckerContext) -> None:
        for ev in self._evidence:
            if ev.inferred.factory:
                self._diagnose_factory(ev, ctx.inferencer)
            else:
                self._diagnose_value(ev)

    def _diagnose_value(self, ev: DefaultEvidence) -> None:
        tag = ev.inferred.tag
        destructured = ev.default.destructured
        if tag in ev.declared:
            if destructured or tag not in REFERENCE_TAGS:
                return
        expected = ev.declared if destructured else factory_expected_tags(ev.declared)
        self._report(ev, ev.default.expression, expected, tag.kind.value)

    def _diagnose_factory(
        self, ev: DefaultEvidence, inferencer: DefaultValueInferencer
    ) -> None:
        if FUNCTION in ev.declared:
            return
        if ev.default.destructured:
            # Destructuring defaults are used as-is, never called
            self._report(ev, ev.default.expression, ev.declared, "function")
            return

        inferred = ev.inferred
        if inferred.expression_body is not None:
            if inferred.body_tag is None or inferred.body_tag in ev.declared:
                return
            body = skip_wrappers(inferred.expression_body)
            self._report(ev, body, ev.declared, inferred.body_tag.kind.value)
            return

        for argument, tag in inferencer.factory_returns(inferred.node):
            if tag not in ev.declared:
                self._report(ev, argument, ev.declared, tag.kind.value)

    def _report(
        self,
        ev: DefaultEvidence,
        node: Optional[Node],
        expected: TagSet,
        actual: str,
    ) -> None:
        type_list = format_tag_list(expected)
        self._emit(
            error_id="requireValidDefaultProp",
            message=(
                f"Type of the default value for '{ev.entry.name}' prop "
                f"must be a {type_list}."
            ),
            node=node,
            evidence={
                "prop": ev.entry.name,
                "expected": [t.kind.value for t in expected],
                "actual": actual,
                "origin": ev.default.origin.value,
            },
        )


# ═════════════════════════════════════════════════════════════════════════
#  PART 6 — CHECKER RUNNER
# ═════════════════════════════════════════════════════════════════════════

# Default registry with all built-in checkers
_DEFAULT_REGISTRY = CheckerRegistry()
_DEFAULT_REGISTRY.register(SpecificityChecker)
_DEFAULT_REGISTRY.register(CompatibilityChecker)


def default_registry() -> CheckerRegistry:
    """The registry holding every built-in checker."""
    return _DEFAULT_REGISTRY


@dataclass
class CheckerRunResults:
    """
    Aggregate results from running a suite of checkers.

    Attributes
    ----------
    diagnostics            : All diagnostics from all checkers
    diagnostics_by_checker : Diagnostics grouped by checker name
    stats                  : Timing and counting statistics
    checker_names          : Names of checkers that were run
    """
    diagnostics: List[Diagnostic] = field(default_factory=list)
    diagnostics_by_checker: Dict[str, List[Diagnostic]] = field(
        default_factory=lambda: defaultdict(list)
    )
    stats: Dict[str, Any] = field(default_factory=dict)
    checker_names: List[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(
            1 for d in self.diagnostics
            if d.severity == DiagnosticSeverity.ERROR
        )

    @property
    def warning_count(self) -> int:
        return sum(
            1 for d in self.diagnostics
            if d.severity == DiagnosticSeverity.WARNING
        )

    @property
    def total_count(self) -> int:
        return len(self.diagnostics)

    def by_rule(self, rule: str) -> List[Diagnostic]:
        return list(self.diagnostics_by_checker.get(_normalize_rule(rule), []))

    def to_json_lines(self) -> str:
        """Format all diagnostics as JSON lines."""
        return "\n".join(d.to_json_str() for d in self.diagnostics)

    def to_gcc_format(self) -> str:
        """Format all diagnostics in GCC-style."""
        return "\n".join(d.to_gcc_format() for d in self.diagnostics)

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            f"Checker run complete: {self.total_count} diagnostics "
            f"({self.error_count} errors, {self.warning_count} warnings)",
        ]
        for name in self.checker_names:
            count = len(self.diagnostics_by_checker.get(name, []))
            elapsed = self.stats.get(f"{name}_elapsed_ms", 0)
            lines.append(f"  {name}: {count} findings ({elapsed:.1f}ms)")
        return "\n".join(lines)


class CheckerRunner:
    """
    Runs a suite of checkers against one program.

    Usage
    -----
    >>> runner = CheckerRunner()
    >>> results = runner.run(program)
    >>> print(results.summary())

    >>> # Or select specific checkers:
    >>> results = runner.run(program, checkers=["require-prop-types"])

    Parameters for constructor
    ─────────────────────────
    registry          : CheckerRegistry — source of checker classes
    suppressions      : SuppressionManager — pre-loaded suppression rules
    options           : dict — per-checker configuration
    resolver          : MacroResolver — recognizes declaration macros
    oracle            : TypeAliasOracle — defaults to a
                        :class:`ProgramTypeOracle` over the analyzed program
    inline_directives : honor ``eslint-disable-*`` comments
    """

    def __init__(
        self,
        registry: Optional[CheckerRegistry] = None,
        suppressions: Optional[SuppressionManager] = None,
        options: Optional[Dict[str, Any]] = None,
        resolver: Optional[MacroResolver] = None,
        oracle: Optional[TypeAliasOracle] = None,
        inline_directives: bool = True,
    ) -> None:
        self.registry = registry or _DEFAULT_REGISTRY
        self.suppressions = suppressions or SuppressionManager()
        self.options = options or {}
        self.resolver = resolver or MacroResolver()
        self.oracle = oracle
        self.inline_directives = inline_directives

    def build_entries(
        self,
        program: Node,
        oracle: Optional[TypeAliasOracle] = None,
    ) -> List[PropEntry]:
        """PropEntry objects of every component in ``program``."""
        if oracle is None:
            oracle = self.oracle or ProgramTypeOracle(program)
        builder = PropEntryBuilder(DeclarationLocator(self.resolver, oracle))
        entries: List[PropEntry] = []
        for description in find_component_descriptions(program, self.resolver):
            entries.extend(builder.build(description))
        return entries

    def run(
        self,
        program: Node,
        checkers: Optional[Sequence[str]] = None,
    ) -> CheckerRunResults:
        """
        Run checkers against a single program.

        Parameters
        ----------
        program  : root node of the tree
        checkers : list of checker names to run (None = all enabled)

        Returns
        -------
        CheckerRunResults
        """
        # Directives belong to this program only; the configured manager
        # stays untouched across runs.
        suppressions = self.suppressions.copy()
        if self.inline_directives:
            suppressions.load_inline_suppressions(program)

        t0 = time.monotonic()
        entries = self.build_entries(program)
        results = self.run_entries(
            entries, checkers=checkers, program=program,
            suppressions=suppressions,
        )
        results.stats["entries"] = len(entries)
        results.stats["total_elapsed_ms"] = (time.monotonic() - t0) * 1000.0
        return results

    def run_entries(
        self,
        entries: List[PropEntry],
        checkers: Optional[Sequence[str]] = None,
        program: Optional[Node] = None,
        suppressions: Optional[SuppressionManager] = None,
    ) -> CheckerRunResults:
        """Run checkers over an already built entry list."""
        results = CheckerRunResults()

        ctx = CheckerContext(
            entries=entries,
            program=program,
            suppressions=suppressions or self.suppressions,
            options=self.options,
        )

        # Determine which checkers to run
        if checkers is not None:
            checker_classes: List[Type[Checker]] = []
            for name in checkers:
                cls = self.registry.get_by_name(name)
                if cls is not None:
                    checker_classes.append(cls)
                else:
                    logger.warning("unknown checker %r ignored", name)
        else:
            checker_classes = self.registry.get_enabled()

        # Run each checker through its lifecycle
        for cls in checker_classes:
            checker = cls()
            checker_name = cls.name
            results.checker_names.append(checker_name)

            t0 = time.monotonic()
            try:
                checker.configure(ctx)
                checker.collect_evidence(ctx)
                checker.diagnose(ctx)
                diags = checker.report(ctx)
            except Exception as exc:
                # Contain the failure, keep the other checkers' results
                logger.exception("checker %s failed", checker_name)
                diags = [Diagnostic(
                    error_id="checkerInternalError",
                    message=f"Checker '{checker_name}' failed: {exc}",
                    severity=DiagnosticSeverity.INFORMATION,
                    location=SourceLocation(file=node_filename(program)),
                    checker_name=checker_name,
                )]
            elapsed_ms = (time.monotonic() - t0) * 1000.0

            results.diagnostics.extend(diags)
            results.diagnostics_by_checker[checker_name] = diags
            results.stats[f"{checker_name}_elapsed_ms"] = elapsed_ms

        return results


# ═════════════════════════════════════════════════════════════════════════
#  PART 7 — CONVENIENCE ENTRY POINTS
# ═════════════════════════════════════════════════════════════════════════

def check_program(
    program: Node,
    checkers: Optional[Sequence[str]] = None,
    suppress: Optional[Sequence[str]] = None,
    oracle: Optional[TypeAliasOracle] = None,
) -> List[Diagnostic]:
    """
    Analyze one program with the built-in checkers.

    Parameters
    ----------
    program  : root node of the tree
    checkers : checker names to run (None = all)
    suppress : rule names / error ids to suppress globally
    oracle   : type-alias oracle (default: aliases declared in ``program``)
    """
    sm = SuppressionManager()
    for key in suppress or ():
        sm.add_global_suppression(key)
    runner = CheckerRunner(suppressions=sm, oracle=oracle)
    return runner.run(program, checkers=checkers).diagnostics


def run_file(
    tree_file: Union[str, Path],
    source_file: Optional[Union[str, Path]] = None,
    checkers: Optional[Sequence[str]] = None,
    suppress: Optional[Sequence[str]] = None,
) -> CheckerRunResults:
    """
    Load a JSON-serialized tree and run the checker suite on it.

    Raises
    ------
    MalformedTreeError
        if the file does not hold an ESTree node
    """
    program = load_tree(tree_file, source_path=source_file)
    sm = SuppressionManager()
    for key in suppress or ():
        sm.add_global_suppression(key)
    return CheckerRunner(suppressions=sm).run(program, checkers=checkers)


# ═════════════════════════════════════════════════════════════════════════
#  PART 8 — PUBLIC API
# ═════════════════════════════════════════════════════════════════════════

__all__ = [
    # Diagnostic model
    "Diagnostic",
    "DiagnosticSeverity",
    "SourceLocation",
    # Suppression
    "SuppressionManager",
    # Checker framework
    "Checker",
    "CheckerContext",
    "CheckerRegistry",
    "default_registry",
    # Prop checkers
    "SpecificityChecker",
    "CompatibilityChecker",
    "DefaultEvidence",
    "factory_expected_tags",
    # Runner
    "CheckerRunner",
    "CheckerRunResults",
    # Entry points
    "check_program",
    "run_file",
]
