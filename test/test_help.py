"""
Help listing behavioral tests.

Scope
- Pin the exact text of render_help (section headers, alignment, default renditions).
- Validate visibility handling (visible, hidden, invisible) and shared column widths.
- Validate that print_help emits the same text through rich.

Conventions
- Test method names follow CamelCase per project convention.
- Expected rows are spelled out literally; padding is written as explicit space runs
  where counting characters by eye would be error prone.
"""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stdout
from unittest import TestCase

from cmdargs import ArgumentParser, Visibility


class TestRenderHelp(TestCase):
    """Behavioral tests for ArgumentParser.render_help."""

    def setUp(self):
        self.parser = ArgumentParser()
        self.parser.value("v", "visible", "shown")
        self.parser.value("x", "extra", "secret", visibility=Visibility.HIDDEN)

    def testVisibleOnly(self):
        help = self.parser.render_help()
        self.assertEqual(help, "[[Allowed Arguments]]\n  -v, --visible   shown\n")
        self.assertIn("--visible", help)
        self.assertNotIn("--extra", help)
        self.assertNotIn("[[Hidden Arguments]]", help)

    def testWithHidden(self):
        help = self.parser.render_help(show_hidden=True)
        self.assertEqual(
            help,
            "[[Allowed Arguments]]\n"
            "  -v, --visible   shown\n"
            "[[Hidden Arguments]]\n"
            "  -x, --extra" + " " * 5 + "secret\n"
        )

    def testInvisibleNeverListed(self):
        self.parser.flag("i", "invisible", "ghost", visibility=Visibility.INVISIBLE)
        self.assertNotIn("--invisible", self.parser.render_help())
        self.assertNotIn("--invisible", self.parser.render_help(True))

    def testInvisibleStillParses(self):
        ghost = self.parser.flag("i", "invisible", "ghost", visibility=Visibility.INVISIBLE)
        self.parser.parse(["prog", "-i"])
        self.assertIs(ghost.value, True)

    def testDefaultRenditions(self):
        parser = ArgumentParser()
        parser.value("t", "threads", "workers", 4)
        parser.implicit("l", "level", "log level", 3)
        parser.flag("q", "quiet", "hush")
        self.assertEqual(
            parser.render_help(),
            "[[Allowed Arguments]]\n"
            "  -t, --threads =4" + " " * 6 + "workers\n"
            "  -l, --level =arg(=3)  log level\n"
            "  -q, --quiet" + " " * 11 + "hush\n"
        )

    def testEmptyShortNameKeepsComma(self):
        parser = ArgumentParser()
        parser.value("", "val1", "first", 3.14)
        parser.flag("f", "flag1", "second")
        self.assertEqual(
            parser.render_help(),
            "[[Allowed Arguments]]\n"
            "    , --val1 =3.14  first\n"
            "  -f, --flag1" + " " * 7 + "second\n"
        )

    def testShortNamesAreRightAligned(self):
        parser = ArgumentParser()
        parser.flag("th", "threads", "a")
        parser.flag("f", "fast", "b")
        lines = parser.render_help().splitlines()
        self.assertTrue(lines[1].startswith("  -th, --threads "))
        self.assertTrue(lines[2].startswith("   -f, --fast "))

    def testHiddenRowsWidenSharedColumns(self):
        parser = ArgumentParser()
        parser.value("a", "ab", "x")
        parser.value("b", "abcdef", "y", visibility=Visibility.HIDDEN)
        self.assertEqual(parser.render_help(), "[[Allowed Arguments]]\n  -a, --ab   x\n")
        self.assertEqual(
            parser.render_help(True),
            "[[Allowed Arguments]]\n"
            "  -a, --ab" + " " * 7 + "x\n"
            "[[Hidden Arguments]]\n"
            "  -b, --abcdef   y\n"
        )

    def testRegistrationOrderIsKept(self):
        parser = ArgumentParser()
        parser.flag("z", "zeta", "last letter")
        parser.flag("a", "alpha", "first letter")
        help = parser.render_help()
        self.assertLess(help.index("--zeta"), help.index("--alpha"))

    def testEmptyRegistry(self):
        parser = ArgumentParser()
        self.assertEqual(parser.render_help(), "[[Allowed Arguments]]\n")
        self.assertEqual(parser.render_help(True), "[[Allowed Arguments]]\n[[Hidden Arguments]]\n")

    def testValueDefaultFollowsParsedValue(self):
        parser = ArgumentParser()
        parser.value("", "val1", "x", 3.14)
        parser.parse(["prog", "--val1", "2.5"])
        self.assertIn("--val1 =2.5", parser.render_help())


class TestPrintHelp(TestCase):
    """print_help writes the render_help text through rich."""

    def setUp(self):
        self.parser = ArgumentParser(colorful=False)
        self.parser.value("t", "threads", "workers", 4)
        self.parser.implicit("l", "level", "log level", 3)
        self.parser.flag("q", "quiet", "hush", visibility=Visibility.HIDDEN)

    def _capture(self, *args):
        with redirect_stdout(io.StringIO()) as stream:
            self.parser.print_help(*args)
        return stream.getvalue()

    def testPlainOutputMatchesRender(self):
        for hidden in (False, True):
            with self.subTest(hidden=hidden):
                output = self._capture(hidden)
                self.assertEqual(
                    [line.rstrip() for line in output.splitlines()],
                    [line.rstrip() for line in self.parser.render_help(hidden).splitlines()],
                )

    def testColorfulOutputKeepsContent(self):
        self.parser.colorful = True
        output = self._capture(True)
        self.assertIn("[[Allowed Arguments]]", output)
        self.assertIn("--threads", output)
        self.assertIn("log level", output)
        self.assertIn("--quiet", output)


if __name__ == "__main__":
    unittest.main()
