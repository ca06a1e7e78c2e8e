"""Shared test fixtures for archmap tests."""

from pathlib import Path
from typing import Callable, Dict

import pytest


@pytest.fixture
def php_tree(tmp_path) -> Callable[[Dict[str, str]], Path]:
    """Materialize a source tree from a {relative path: content} dict.

    Returns the root directory. Parent directories are created as needed.
    """

    def _build(files: Dict[str, str]) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _build


@pytest.fixture
def layered_project(php_tree) -> Path:
    """Small PSR-4 style project under src/ with three layers.

    Http depends on Domain and Infrastructure, Infrastructure implements a
    Domain interface, Domain depends on nothing.
    """
    return php_tree(
        {
            "src/Domain/Order.php": (
                "<?php\n"
                "namespace App\\Domain;\n"
                "\n"
                "class Order\n"
                "{\n"
                "    public function total(): int { return $this->paid ? 1 : 0; }\n"
                "}\n"
            ),
            "src/Domain/OrderRepository.php": (
                "<?php\nnamespace App\\Domain;\n\ninterface OrderRepository\n{\n}\n"
            ),
            "src/Infrastructure/SqlOrderRepository.php": (
                "<?php\n"
                "namespace App\\Infrastructure;\n"
                "\n"
                "use App\\Domain\\OrderRepository;\n"
                "\n"
                "class SqlOrderRepository implements OrderRepository\n"
                "{\n"
                "}\n"
            ),
            "src/Http/OrderController.php": (
                "<?php\n"
                "namespace App\\Http;\n"
                "\n"
                "use App\\Domain\\Order;\n"
                "use App\\Infrastructure\\SqlOrderRepository as Repo;\n"
                "\n"
                "abstract class OrderController\n"
                "{\n"
                "    public function show($id)\n"
                "    {\n"
                "        if ($id && $id > 0) {\n"
                "            return new Order();\n"
                "        }\n"
                "    }\n"
                "}\n"
            ),
        }
    )
