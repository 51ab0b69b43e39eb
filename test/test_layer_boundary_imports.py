import ast
import unittest
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parents[1]
_BACKEND = _REPO_ROOT / "backend"


def _iter_py_files(root: Path) -> list[Path]:
    return sorted(p for p in root.rglob("*.py") if "__pycache__" not in p.parts)


def _imported_modules(py_file: Path) -> list[str]:
    """AST-based (not regex) so comments/strings never count as imports."""
    tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
    mods: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            mods.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module is not None:
            mods.append(node.module)
    return mods


def _violations(root: Path, forbidden: tuple[str, ...]) -> list[str]:
    out: list[str] = []
    for py_file in _iter_py_files(root):
        bad = [m for m in _imported_modules(py_file) if m.split(".")[0] in forbidden]
        if bad:
            out.append(f"{py_file.relative_to(_REPO_ROOT)}: {bad}")
    return out


class TestLayerBoundaryImports(unittest.TestCase):
    # layer dir -> top-level packages it must never import
    RULES = {
        "domain": ("application", "infrastructure", "server", "config", "asyncpg", "fastapi"),
        "application": ("infrastructure", "server", "config", "asyncpg", "fastapi"),
        "infrastructure": ("application", "server", "config", "fastapi"),
    }

    def test_inner_layers_stay_inside_their_boundary(self) -> None:
        for layer, forbidden in self.RULES.items():
            with self.subTest(layer=layer):
                root = _BACKEND / layer
                self.assertTrue(root.exists(), msg=f"Expected layer dir: {root}")
                found = _violations(root, forbidden)
                self.assertFalse(
                    found,
                    msg=f"`backend/{layer}` must not import {forbidden}.\n" + "\n".join(found),
                )

    def test_routes_reach_storage_only_through_the_gateway(self) -> None:
        """Only the dependency module wires Postgres; route modules see the gateway."""
        routes_root = _BACKEND / "server" / "api" / "rest" / "v1"
        found = _violations(routes_root, ("infrastructure", "asyncpg"))
        self.assertFalse(found, msg="Route modules must not import storage code.\n" + "\n".join(found))

    def test_sql_lives_only_in_the_postgres_package(self) -> None:
        postgres_root = _BACKEND / "infrastructure" / "persistence" / "postgres"
        offenders: list[str] = []
        for py_file in _iter_py_files(_BACKEND):
            if postgres_root in py_file.parents:
                continue
            text = py_file.read_text(encoding="utf-8")
            if "DELETE FROM" in text or "INSERT INTO" in text:
                offenders.append(str(py_file.relative_to(_REPO_ROOT)))
        self.assertFalse(offenders, msg="SQL outside the postgres package:\n" + "\n".join(offenders))
