"""
Contract tests: module boundary enforcement.

Scans all Python files under backend/modules/ for imports that reach into
another module's routes or services. Modules may share data types (models and
schemas); behavior crosses a module boundary only through the provider
interfaces in core/interfaces/, looked up in the registry.

What is ALLOWED:
- Importing from another module's models.py  (shared data types)
- Importing from another module's schemas.py (shared Pydantic types)

What is FLAGGED as a violation:
- Importing from another module's routes, services or helper files

Run: pytest tests/test_contracts/test_no_cross_module_imports.py -v
"""

import re
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[2] / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

MODULES_DIR = BACKEND_DIR / "modules"

IMPORT_RE = re.compile(r"(?:from|import)\s+modules\.([a-z_]+)")

# Substrings that exempt an import line from being flagged.
ALLOWED_PATTERNS = [
    ".models import",
    ".schemas import",
]


def _module_dirs():
    return [d for d in sorted(MODULES_DIR.iterdir()) if d.is_dir() and not d.name.startswith("_")]


def _cross_module_imports():
    """Yield (path, lineno, own module, referenced module, line) for every cross-module import."""
    for module_dir in _module_dirs():
        own_module = module_dir.name
        for py_file in sorted(module_dir.rglob("*.py")):
            if "__pycache__" in py_file.parts:
                continue
            lines = py_file.read_text(encoding="utf-8").splitlines()
            for lineno, raw_line in enumerate(lines, start=1):
                stripped = raw_line.strip()
                if not stripped.startswith(("from modules.", "import modules.")):
                    continue
                m = IMPORT_RE.search(stripped)
                if not m or m.group(1) == own_module:
                    continue
                yield py_file, lineno, own_module, m.group(1), stripped


def _find_violations() -> list[str]:
    violations = []
    for py_file, lineno, _, _, line in _cross_module_imports():
        if any(pattern in line for pattern in ALLOWED_PATTERNS):
            continue
        rel_path = py_file.relative_to(BACKEND_DIR.parent)
        violations.append(f"{rel_path}:{lineno}: {line}")
    return violations


# ---------------------------------------------------------------------------
# The test
# ---------------------------------------------------------------------------

class TestNoCrossModuleImports:

    def test_no_direct_cross_module_imports(self):
        """No module may import route logic or service functions from another module."""
        violations = _find_violations()
        assert not violations, (
            f"Cross-module route/service imports found ({len(violations)} violation(s)).\n"
            "Move shared helpers to core/, or expose the behavior through a\n"
            "provider interface in core/interfaces/ and look it up in the registry.\n\n"
            "Violations:\n" + "\n".join(f"  {v}" for v in violations)
        )

    def test_modules_directory_exists(self):
        assert MODULES_DIR.is_dir(), f"backend/modules/ not found at {MODULES_DIR}"

    def test_all_modules_scanned(self):
        names = [d.name for d in _module_dirs()]
        assert len(names) >= 5, f"Expected at least 5 module directories, found {names}"


# ---------------------------------------------------------------------------
# Informational: report all cross-module imports
# ---------------------------------------------------------------------------

def test_cross_module_import_inventory():
    """Non-failing inventory of the dependency graph (use -s to see it)."""
    graph: dict[str, set[str]] = {}
    for _, _, own, ref, _ in _cross_module_imports():
        graph.setdefault(own, set()).add(ref)
    for own in sorted(graph):
        print(f"{own} -> {', '.join(sorted(graph[own]))}")
    assert isinstance(graph, dict)
