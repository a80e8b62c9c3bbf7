from __future__ import annotations

import importlib.util
import os
import unittest
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parent.parent


def load_setup_module():
    spec = importlib.util.spec_from_file_location("htmlindex_setup", ROOT / "setup.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestBuildHook(unittest.TestCase):
    def test_compiled_modules_exist(self) -> None:
        for path in load_setup_module().COMPILED_MODULES:
            with self.subTest(path=path):
                assert (ROOT / path).is_file()

    def test_pure_python_by_default(self) -> None:
        setup_module = load_setup_module()
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop("HTMLINDEX_USE_MYPYC", None)
            assert setup_module.compiled_extensions() == []


if __name__ == "__main__":
    unittest.main()
