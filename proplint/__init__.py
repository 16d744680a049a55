"""
proplint
════════

Static checks for UI component prop declarations.

Two rules share one extraction-and-inference engine:

  * ``require-prop-types``         — every prop declares a type or validator
  * ``require-valid-default-prop`` — default values match the declared type

Quick start::

    from proplint import check_program, load_tree

    program = load_tree("Component.json", source_path="Component.vue")
    for diag in check_program(program):
        print(diag.to_gcc_format())
"""

__version__ = "0.1.0"

from proplint.checkers import (  # noqa: E402
    CheckerRunner,
    CheckerRunResults,
    CompatibilityChecker,
    Diagnostic,
    DiagnosticSeverity,
    SourceLocation,
    SpecificityChecker,
    SuppressionManager,
    check_program,
    run_file,
)
from proplint.entries import PropDefault, PropEntry, PropEntryBuilder  # noqa: E402
from proplint.errors import (  # noqa: E402
    ConfigurationError,
    MalformedTreeError,
    ProplintError,
)
from proplint.estree import Node, build_tree, load_tree  # noqa: E402
from proplint.macros import DeclarationShape, MacroResolver  # noqa: E402
from proplint.oracle import (  # noqa: E402
    NullTypeOracle,
    ProgramTypeOracle,
    TypeAliasOracle,
)
from proplint.type_tags import TypeTag, TypeTagMapper  # noqa: E402

__all__ = [
    "__version__",
    "CheckerRunner",
    "CheckerRunResults",
    "CompatibilityChecker",
    "Diagnostic",
    "DiagnosticSeverity",
    "SourceLocation",
    "SpecificityChecker",
    "SuppressionManager",
    "check_program",
    "run_file",
    "PropDefault",
    "PropEntry",
    "PropEntryBuilder",
    "ConfigurationError",
    "MalformedTreeError",
    "ProplintError",
    "Node",
    "build_tree",
    "load_tree",
    "DeclarationShape",
    "MacroResolver",
    "NullTypeOracle",
    "ProgramTypeOracle",
    "TypeAliasOracle",
    "TypeTag",
    "TypeTagMapper",
]
