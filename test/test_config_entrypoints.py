import ast
import unittest
from pathlib import Path


def _iter_py_files(root: Path) -> list[Path]:
    return sorted(
        p
        for p in root.rglob("*.py")
        if "__pycache__" not in p.parts
    )


def _imports_module(tree: ast.AST, module: str) -> bool:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name == module or alias.name.startswith(module + "."):
                    return True
        elif isinstance(node, ast.ImportFrom):
            if node.module is None:
                continue
            if node.module == module or node.module.startswith(module + "."):
                return True
    return False


def _load_dotenv_calls(tree: ast.AST) -> list[ast.Call]:
    calls: list[ast.Call] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        if isinstance(node.func, ast.Name) and node.func.id == "load_dotenv":
            calls.append(node)
        elif isinstance(node.func, ast.Attribute) and node.func.attr == "load_dotenv":
            calls.append(node)
    return calls


class TestConfigEntrypoints(unittest.TestCase):
    def test_load_dotenv_only_in_service_settings_with_override(self) -> None:
        """
        Guardrail: `.env` is loaded once, by `config.settings`, with override=True.
        `config.database` and everything below it only read the environment.
        """
        repo_root = Path(__file__).resolve().parents[1]
        backend_root = repo_root / "backend"
        entrypoint = backend_root / "config" / "settings.py"

        offenders: list[str] = []
        found_entrypoint_call = False
        for py_file in _iter_py_files(backend_root):
            tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
            for call in _load_dotenv_calls(tree):
                rel = py_file.relative_to(repo_root)
                if py_file != entrypoint:
                    offenders.append(f"{rel}: load_dotenv() must only appear in config/settings.py")
                    continue
                found_entrypoint_call = True
                if not any(
                    kw.arg == "override" and isinstance(kw.value, ast.Constant) and kw.value.value is True
                    for kw in call.keywords
                ):
                    offenders.append(f"{rel}: load_dotenv() must use override=True")

        self.assertTrue(found_entrypoint_call, msg="config/settings.py no longer loads .env")
        self.assertFalse(offenders, msg="Dotenv policy violations:\n" + "\n".join(offenders))

    def test_inner_layers_do_not_import_service_config(self) -> None:
        """
        Guardrail: only the server reads `config.*`. The connection manager gets
        host/port/pool bounds as plain arguments; domain/application never see config.
        """
        repo_root = Path(__file__).resolve().parents[1]
        roots = [
            repo_root / "backend" / "domain",
            repo_root / "backend" / "application",
            repo_root / "backend" / "infrastructure",
        ]

        offenders: list[str] = []
        for root in roots:
            for py_file in _iter_py_files(root):
                tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
                if _imports_module(tree, "config"):
                    offenders.append(str(py_file.relative_to(repo_root)))

        self.assertFalse(
            offenders,
            msg=(
                "domain/application/infrastructure must not import service config (`config.*`). "
                "Pass values in explicitly from `server.api.rest.dependencies`.\n"
                + "\n".join(offenders)
            ),
        )

    def test_server_main_loads_settings_before_wiring(self) -> None:
        repo_root = Path(__file__).resolve().parents[1]
        main_py = repo_root / "backend" / "server" / "main.py"
        tree = ast.parse(main_py.read_text(encoding="utf-8"), filename=str(main_py))

        order: list[str] = []
        for node in tree.body:
            if isinstance(node, ast.ImportFrom) and node.module:
                order.append(node.module)
        self.assertIn("config.settings", order)
        self.assertIn("server.api.rest.dependencies", order)
        self.assertLess(order.index("config.settings"), order.index("server.api.rest.dependencies"))
