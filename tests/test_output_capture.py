# tests/test_output_capture.py

import sys
import threading
import time
import unittest

from pmd_gate.output_capture import InProcessAnalyzer, capture_output


class TestCaptureOutput(unittest.TestCase):

    def test_captures_both_streams(self):
        with capture_output() as captured:
            print("report line")
            print("warning line", file=sys.stderr)
        self.assertEqual(captured.stdout, "report line\n")
        self.assertEqual(captured.stderr, "warning line\n")

    def test_restores_streams_on_exception(self):
        original_out, original_err = sys.stdout, sys.stderr
        with self.assertRaises(ValueError):
            with capture_output():
                raise ValueError("boom")
        self.assertIs(sys.stdout, original_out)
        self.assertIs(sys.stderr, original_err)

    def test_concurrent_captures_do_not_mix(self):
        results = {}

        def worker(name):
            with capture_output() as captured:
                for i in range(20):
                    print(f"{name}-{i}")
                    time.sleep(0.001)
            results[name] = captured.stdout.splitlines()

        threads = [threading.Thread(target=worker, args=(name,)) for name in ("a", "b", "c")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for name in ("a", "b", "c"):
            self.assertEqual(results[name], [f"{name}-{i}" for i in range(20)])


class TestInProcessAnalyzer(unittest.TestCase):

    def test_passes_arguments_and_collects_output(self):
        seen = []

        def fake_main(argv):
            seen.append(argv)
            print("Foo.java:1:\tRule:\tmessage")
            return 4

        output = InProcessAnalyzer(fake_main)(["/src", "text", "/rules.xml"])
        self.assertEqual(seen, [["/src", "text", "/rules.xml"]])
        self.assertEqual(output.stdout, "Foo.java:1:\tRule:\tmessage\n")
        self.assertEqual(output.stderr, "")
        self.assertEqual(output.returncode, 4)

    def test_system_exit_becomes_return_code(self):
        def exiting_main(argv):
            sys.exit(4)

        self.assertEqual(InProcessAnalyzer(exiting_main)([]).returncode, 4)

    def test_system_exit_without_code(self):
        def exiting_main(argv):
            sys.exit()

        self.assertEqual(InProcessAnalyzer(exiting_main)([]).returncode, 0)

    def test_failing_exit_code_without_output_is_reported(self):
        def exiting_main(argv):
            sys.exit(2)

        output = InProcessAnalyzer(exiting_main)([])
        self.assertEqual(output.returncode, 2)
        self.assertEqual(output.stderr, "Analyzer exited with return code 2\n")

    def test_violations_exit_code_is_not_an_error(self):
        output = InProcessAnalyzer(lambda argv: 4)([])
        self.assertEqual(output.stderr, "")

    def test_system_exit_with_message(self):
        def exiting_main(argv):
            sys.exit("fatal: no rules")

        output = InProcessAnalyzer(exiting_main)([])
        self.assertEqual(output.returncode, 1)
        self.assertEqual(output.stderr, "fatal: no rules\n")


if __name__ == '__main__':
    unittest.main()
