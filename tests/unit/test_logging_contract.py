# PATH: tests/unit/test_logging_contract.py
"""
Tests for the logging contract.

No kwargs to logger; only extra={"context": {...}} allowed.
"""

import ast
import json
import logging
import unittest
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List

from core.logging import (
    ConsoleFormatter,
    JSONFormatter,
    clear_global_context,
    get_logger,
    set_global_context,
)

PROJECT_ROOT = Path(__file__).parent.parent.parent

CHECKED_MODULES = [
    "chains/okx_client.py",
    "config/__init__.py",
    "strategy/path_calculator.py",
    "strategy/selector.py",
    "strategy/monitor.py",
    "strategy/report.py",
    "strategy/jobs/run_monitor.py",
]


class TestLoggingContractEnforcement(unittest.TestCase):
    """AST-based tests for logging contract."""

    ALLOWED_KWARGS = {"exc_info", "extra", "stack_info", "stacklevel"}

    def _find_logger_violations(self, source_code: str) -> List[Dict[str, Any]]:
        """Find logger calls with invalid kwargs using AST."""
        violations = []
        tree = ast.parse(source_code)

        for node in ast.walk(tree):
            if not isinstance(node, ast.Call) or not isinstance(node.func, ast.Attribute):
                continue

            method_name = node.func.attr
            if method_name not in ("debug", "info", "warning", "error", "critical", "exception"):
                continue

            obj = node.func.value
            if isinstance(obj, ast.Name):
                is_logger = "log" in obj.id.lower()
            elif isinstance(obj, ast.Attribute):
                is_logger = "log" in obj.attr.lower()
            else:
                is_logger = False

            if not is_logger:
                continue

            for kw in node.keywords:
                if kw.arg and kw.arg not in self.ALLOWED_KWARGS:
                    violations.append({
                        "line": node.lineno,
                        "method": method_name,
                        "invalid_kwarg": kw.arg,
                    })

        return violations

    def test_modules_have_no_invalid_kwargs(self):
        for relpath in CHECKED_MODULES:
            filepath = PROJECT_ROOT / relpath
            with self.subTest(module=relpath):
                source = filepath.read_text(encoding="utf-8")
                violations = self._find_logger_violations(source)
                if violations:
                    msg = f"Found {len(violations)} logging violations in {relpath}:\n"
                    for v in violations:
                        msg += f"  Line {v['line']}: logger.{v['method']}(..., {v['invalid_kwarg']}=...)\n"
                    self.fail(msg)

    def test_detector_flags_bad_kwarg(self):
        violations = self._find_logger_violations('logger.info("x", venue="BSC")\n')
        self.assertEqual(violations, [{"line": 1, "method": "info", "invalid_kwarg": "venue"}])


class TestFormatters(unittest.TestCase):
    """JSON and console output."""

    def tearDown(self):
        clear_global_context()

    def make_record(self, context=None) -> logging.LogRecord:
        record = logging.LogRecord(
            name="xarb.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Step 1: 500 USDT -> 1.000000 WBNB (BSC)",
            args=(),
            exc_info=None,
        )
        if context is not None:
            record.context = context
        return record

    def test_json_includes_context(self):
        output = json.loads(JSONFormatter().format(self.make_record({"venue": "BSC", "amount": Decimal("1.5")})))
        self.assertEqual(output["level"], "INFO")
        self.assertEqual(output["logger"], "xarb.test")
        self.assertEqual(output["context"], {"venue": "BSC", "amount": "1.5"})

    def test_json_merges_global_context(self):
        set_global_context(service="xarb-monitor")
        output = json.loads(JSONFormatter().format(self.make_record({"venue": "BSC"})))
        self.assertEqual(output["context"], {"service": "xarb-monitor", "venue": "BSC"})

    def test_json_without_context(self):
        output = json.loads(JSONFormatter().format(self.make_record()))
        self.assertNotIn("context", output)

    def test_console_truncates_context(self):
        line = ConsoleFormatter().format(self.make_record({"a": 1, "b": 2, "c": 3, "d": 4}))
        self.assertIn("a=1, b=2, c=3", line)
        self.assertIn("(+1 more)", line)

    def test_adapter_merges_default_context(self):
        logger = get_logger("xarb.test.adapter", pair="WBNB/USDT")
        msg, kwargs = logger.process("hello", {"extra": {"context": {"cycle": 3}}})
        self.assertEqual(msg, "hello")
        self.assertEqual(kwargs["extra"]["context"], {"pair": "WBNB/USDT", "cycle": 3})


if __name__ == "__main__":
    unittest.main()
