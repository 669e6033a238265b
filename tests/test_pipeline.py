"""
End-to-end tests for heap reconstruction.

Tests the full pipeline from heap log text to generated script, and the
command line front end.
"""

import unittest
import sys
import os
import io
import tempfile
from contextlib import redirect_stderr, redirect_stdout

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from heapgen import reconstruct_heap, build_graph, EmitterConfig, HeapGenError
from heapgen.cli import main
from heapgen.model.errors import ClassificationError, UnresolvedAddressError


TWO_OBJECTS = """\
# Roots.
0x2 B R
0x1 G other
==========
0x1 B Object <unknown object>
> 0x2 B foo
0x2 B Object <unknown object>
"""

EXPECTED_SCRIPT = """\
(() => {
let n0={e0:0};
let n1={};

n0.e0=n1;

blackRoot()[0]=n1;
grayRoot()[0]=n0;
})();
"""


class TestReconstructHeap(unittest.TestCase):
    """Test the full reconstruction pipeline."""

    def test_two_objects(self):
        self.assertEqual(reconstruct_heap(TWO_OBJECTS), EXPECTED_SCRIPT)

    def test_output_is_deterministic(self):
        first = reconstruct_heap(TWO_OBJECTS)
        second = reconstruct_heap(TWO_OBJECTS)
        self.assertEqual(first, second)

    def test_without_wrapper(self):
        script = reconstruct_heap(TWO_OBJECTS, EmitterConfig(wrap_in_function=False))
        self.assertTrue(script.startswith("let n0={e0:0};\n"))
        self.assertNotIn("=>", script)

    def test_unknown_kind_fails(self):
        text = "# Roots.\n0x1 B r\n==========\n0x1 B Mystery thing\n"
        with self.assertRaises(ClassificationError):
            reconstruct_heap(text)

    def test_undeclared_edge_target_fails(self):
        text = "# Roots.\n0x1 B r\n==========\n0x1 B Function\n> 0xdead B next\n"
        with self.assertRaises(UnresolvedAddressError):
            reconstruct_heap(text)

    def test_fullwidth_digit_edge_is_a_property(self):
        text = """\
# Roots.
0x1 B r
==========
0x1 B Function
> 0x2 B objectElements[1]
> 0x2 B objectElements[１]
0x2 B Function
"""
        script = reconstruct_heap(text, EmitterConfig(wrap_in_function=False))
        self.assertIn("let n0={e0:0};\n", script)
        self.assertIn("n0[1]=n1;\nn0.e0=n1;\n", script)

    def test_build_graph_marks(self):
        graph = build_graph(TWO_OBJECTS)
        self.assertTrue(all(node.marked for node in graph.nodes))


class TestCommandLine(unittest.TestCase):
    """Test the heapgen command."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.dump = os.path.join(self.tmpdir.name, "gc-log.txt")
        self.output = os.path.join(self.tmpdir.name, "heap.js")

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write_dump(self, text):
        with open(self.dump, "w", encoding="utf-8") as f:
            f.write(text)

    def test_writes_to_stdout(self):
        self._write_dump(TWO_OBJECTS)
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            status = main([self.dump])
        self.assertEqual(status, 0)
        self.assertEqual(stdout.getvalue(), EXPECTED_SCRIPT)

    def test_writes_to_file(self):
        self._write_dump(TWO_OBJECTS)
        status = main([self.dump, "-o", self.output, "--stats", "-l", "error"])
        self.assertEqual(status, 0)
        with open(self.output, encoding="utf-8") as f:
            self.assertEqual(f.read(), EXPECTED_SCRIPT)

    def test_error_produces_no_output(self):
        self._write_dump("# Roots.\n0x1 Q root\n")
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            status = main([self.dump, "-o", self.output])
        self.assertEqual(status, 1)
        self.assertFalse(os.path.exists(self.output))
        self.assertIn("P002", stderr.getvalue())
        self.assertIn("gc-log.txt:2", stderr.getvalue())

    def test_stats_logged_at_default_level(self):
        self._write_dump(TWO_OBJECTS)
        with self.assertLogs("heapgen", level="INFO") as cm:
            status = main([self.dump, "-o", self.output, "--stats"])
        self.assertEqual(status, 0)
        self.assertTrue(any("nodes: 2 (2 marked)" in line for line in cm.output))

    def test_missing_dump(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            status = main([os.path.join(self.tmpdir.name, "absent.txt"), "-o", self.output])
        self.assertEqual(status, 1)
        self.assertIn("can't read heap log", stderr.getvalue())
        self.assertFalse(os.path.exists(self.output))

    def test_dump_not_utf8(self):
        with open(self.dump, "wb") as f:
            f.write(b"# Roots.\n0x1 B \xff\xfe root\n")
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            status = main([self.dump, "-o", self.output])
        self.assertEqual(status, 1)
        self.assertIn("can't read heap log", stderr.getvalue())
        self.assertFalse(os.path.exists(self.output))

    def test_invalid_log_level(self):
        self._write_dump(TWO_OBJECTS)
        with self.assertRaises(ValueError):
            main([self.dump, "-l", "chatty"])

    def test_errors_share_a_base_class(self):
        self._write_dump("# Roots.\n0x1 B root\n")
        with self.assertRaises(HeapGenError):
            with open(self.dump, encoding="utf-8") as f:
                build_graph(f.read())


if __name__ == '__main__':
    unittest.main()
