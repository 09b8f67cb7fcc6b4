# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


"""
test version comparison
"""
import unittest
import textwrap
from vernorm.tests.util import TestBase
from vernorm.version import Version, parse_version, reverse_sort_key
from vernorm.version._util import _ReversedComparable
from vernorm.exceptions import InvalidOperator


def _print(txt=''):
    # uncomment for verbose output
    # print(txt)
    pass


class TestCompare(TestBase):
    def _test_strict_weak_ordering(self, a, b):
        self.assertTrue(a == a)
        self.assertTrue(b == b)

        e       = (a == b)
        ne      = (a != b)
        lt      = (a < b)
        lte     = (a <= b)
        gt      = (a > b)
        gte     = (a >= b)

        _print('\n' + textwrap.dedent(
               """
               '%s' <op> '%s'
               ==:  %s
               !=:  %s
               <:   %s
               <=:  %s
               >:   %s
               >=:  %s
               """).strip() % (a, b, e, ne, lt, lte, gt, gte))

        self.assertTrue(e != ne)
        if e:
            self.assertTrue(not lt)
            self.assertTrue(not gt)
            self.assertTrue(lte)
            self.assertTrue(gte)
        else:
            self.assertTrue(lt != gt)
            self.assertTrue(lte != gte)
            self.assertTrue(lt == lte)
            self.assertTrue(gt == gte)

        if not isinstance(a, _ReversedComparable):
            self._test_strict_weak_ordering(reverse_sort_key(a),
                                            reverse_sort_key(b))

    def _test_ordered(self, items):
        def _test(fn, items_, op_str):
            for i, a in enumerate(items_):
                for b in items_[i+1:]:
                    _print("'%s' %s '%s'" % (a, op_str, b))
                    self.assertTrue(fn(a, b))

        _test(lambda a, b: a < b, items, '<')
        _test(lambda a, b: a <= b, items, '<=')
        _test(lambda a, b: a != b, items, '!=')
        _test(lambda a, b: a > b, list(reversed(items)), '>')
        _test(lambda a, b: a >= b, list(reversed(items)), '>=')
        _test(lambda a, b: a != b, list(reversed(items)), '!=')

    def test_operators(self):
        """Test comparison with operator strings."""
        entries = [
            ("1.25.0", ">", "1.24.0", True),
            ("1.25.0", ">", "1.25.0", False),
            ("1.25.0", ">", "1.26.0", False),
            ("1.25.0", ">=", "1.24.0", True),
            ("1.25.0", ">=", "1.25.0", True),
            ("1.25.0", ">=", "1.26.0", False),
            ("1.25.0", "<", "1.24.0", False),
            ("1.25.0", "<", "1.25.0", False),
            ("1.25.0", "<", "1.26.0", True),
            ("1.0.0", "<", "1.2-dev", True),
            ("1.25.0-beta2.1", "<", "1.25.0-b.3", True),
            ("1.25.0-b2.1", "<", "1.25.0beta.3", True),
            ("1.25.0-b-2.1", "<", "1.25.0-rc", True),
            ("1.25.0", "<=", "1.24.0", False),
            ("1.25.0", "<=", "1.25.0", True),
            ("1.25.0", "<=", "1.26.0", True),
            ("1.25.0", "==", "1.24.0", False),
            ("1.25.0", "==", "1.25.0", True),
            ("1.25.0", "==", "1.26.0", False),
            ("1.25.0-beta2.1", "==", "1.25.0-b.2.1", True),
            ("1.25.0beta2.1", "==", "1.25.0-b2.1", True),
            ("1.25.0", "=", "1.24.0", False),
            ("1.25.0", "=", "1.25.0", True),
            ("1.25.0", "=", "1.26.0", False),
            ("1.25.0", "!=", "1.24.0", True),
            ("1.25.0", "!=", "1.25.0", False),
            ("1.25.0", "!=", "1.26.0", True),
            ("1.25.0", "<>", "1.24.0", True),
            ("1.25.0", "<>", "1.25.0", False),
            ("1.25.0", "<>", "1.26.0", True)
        ]

        for a, op, b, expected in entries:
            result = parse_version(a).compare(parse_version(b), op)
            self.assertEqual(result, expected, "%s %s %s" % (a, op, b))

    def test_three_way(self):
        """Test three-way comparison."""
        a = parse_version("1.0.0")
        b = parse_version("1.0.1")

        self.assertEqual(a.compare(b), -1)
        self.assertEqual(b.compare(a), 1)
        self.assertEqual(a.compare(parse_version("v1.0")), 0)

    def test_invalid_operator(self):
        """Test an unsupported operator."""
        a = parse_version("1.0")
        with self.assertRaises(InvalidOperator):
            a.compare(a, "=>")

    def test_ordering(self):
        """Test version ordering."""
        ver_strs = [
            "1.0-dev",
            "1.0-alpha",
            "1.0-alpha2",
            "1.0-beta",
            "1.0-beta2",
            "1.0-beta2.1",
            "1.0-beta3",
            "1.0-RC1",
            "1.0",
            "1.0.1",
            "1.1",
            "2.0",
            "dev-master"
        ]
        versions = [parse_version(x) for x in ver_strs]
        self._test_ordered(versions)

        for a in versions:
            for b in versions:
                self._test_strict_weak_ordering(a, b)

        self.assertEqual(sorted(reversed(versions)), versions)
        self.assertEqual(sorted(versions, key=reverse_sort_key),
                         list(reversed(versions)))

    def test_equality(self):
        """Test that equality ignores metadata and spelling."""
        self.assertEqual(Version("1.0"), Version("v1.0.0.0"))
        self.assertEqual(Version("1.0+build.1"), Version("1.0"))
        self.assertEqual(Version("1.0-b2"), Version("1.0beta.2"))
        self.assertNotEqual(Version("1.0"), "1.0")
        self.assertEqual(len(set([Version("1.0"), Version("1.0.0"),
                                  Version("1.0+foo")])), 1)

    def test_patch_stability(self):
        """Test that patch releases rank as stable."""
        self.assertEqual(Version("1.0-patch").compare(Version("1.0")), 0)
        self.assertTrue(Version("1.0-RC1") < Version("1.0-p1"))
        self.assertTrue(Version("1.0-p1") > Version("1.0"))

    def test_extra_ignored(self):
        """Test that the fourth numeric component does not affect ordering."""
        self.assertEqual(Version("1.0.0.1"), Version("1.0.0"))
        self.assertEqual(Version("1.0.0.1").compare(Version("1.0.0.9")), 0)
        self.assertTrue(Version("1.0.0.9") < Version("1.0.1"))
        self.assertEqual(len(set([Version("1.0.0.1"), Version("1.0")])), 1)

    def test_date_ordering(self):
        """Test that date versions are ordered by their date."""
        self._test_ordered([
            parse_version("20100102"),
            parse_version("20100103"),
            parse_version("20100103-203040"),
            parse_version("20100104")
        ])
        self._test_ordered([
            parse_version("2010-01-02"),
            parse_version("2010-01-03"),
            parse_version("2010-02-01")
        ])
        self.assertTrue(parse_version("2010-01-02-beta")
                        < parse_version("2010-01-02"))
        self.assertTrue(parse_version("2010-01-02-p1")
                        > parse_version("2010-01-02"))

    def test_branch_ordering(self):
        """Test that dev branches order by name, below every release."""
        foo = parse_version("dev-foo")
        bar = parse_version("dev-bar")

        self.assertNotEqual(foo, bar)
        self.assertEqual(foo, parse_version("dev-foo"))
        self.assertEqual(foo.stability, "dev")
        self.assertTrue(bar < foo)
        self._test_ordered([
            bar,
            foo,
            parse_version("0.0.0-dev"),
            parse_version("0.0.0"),
            parse_version("dev-master")
        ])


if __name__ == '__main__':
    unittest.main()
