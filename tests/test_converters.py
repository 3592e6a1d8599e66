#!/usr/bin/env python3


# part of the gnuopts software package
# Copyright 2021-2023 by Larry Hastings
# All rights reserved.
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included
# in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
# IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM,
# DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT,
# TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE
# OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.


def preload_local_gnuopts():
    """
    Pre-load the local "gnuopts" module, to preclude finding
    an already-installed one on the path.
    """
    from pathlib import Path
    import sys
    gnuopts_dir = Path(__file__).resolve().parent.parent
    sys.path.insert(1, str(gnuopts_dir))
    import gnuopts
    return gnuopts_dir

gnuopts_dir = preload_local_gnuopts()

import babel
import gnuopts
import math
import unittest


en_US = babel.Locale.parse("en_US")
de_DE = babel.Locale.parse("de_DE")


class TestConverters(unittest.TestCase):

    def assert_illegal(self, converter, value, locale=en_US):
        with self.assertRaises(gnuopts.IllegalOptionValueError) as cm:
            converter(value, locale)
        self.assertEqual(cm.exception.value, value)
        self.assertIs(cm.exception.converter, converter)
        self.assertIsNone(cm.exception.option)

    def test_string(self):
        c = gnuopts.string_converter
        self.assertEqual(c("hello", en_US), "hello")
        self.assertEqual(c("", en_US), "")
        # strings don't care about the locale
        self.assertEqual(c("0,5", de_DE), "0,5")
        self.assert_illegal(c, None)

    def test_integer(self):
        c = gnuopts.integer_converter
        self.assertEqual(c("42", en_US), 42)
        self.assertEqual(c("-42", en_US), -42)
        self.assertEqual(c("1,000", en_US), 1000)
        self.assertEqual(c("1.000", de_DE), 1000)
        self.assert_illegal(c, None)
        self.assert_illegal(c, "blah")
        self.assert_illegal(c, "1.5")
        self.assert_illegal(c, "")
        self.assert_illegal(c, str(2 ** 31))
        self.assert_illegal(c, str(-(2 ** 31) - 1))

    def test_long(self):
        c = gnuopts.long_converter
        self.assertEqual(c(str(2 ** 31), en_US), 2 ** 31)
        self.assertEqual(c(str((2 ** 63) - 1), en_US), (2 ** 63) - 1)
        self.assertEqual(c(str(-(2 ** 63)), en_US), -(2 ** 63))
        self.assert_illegal(c, str(2 ** 63))
        self.assert_illegal(c, None)
        self.assertIsInstance(c, gnuopts.IntegerConverter)

    def test_double(self):
        c = gnuopts.double_converter
        self.assertEqual(c("0.25", en_US), 0.25)
        self.assertEqual(c("0,25", de_DE), 0.25)
        self.assertEqual(c("1,234.5", en_US), 1234.5)
        self.assertEqual(c("1.234,5", de_DE), 1234.5)
        self.assertEqual(c("-10", en_US), -10.0)
        self.assertIsInstance(c("3", en_US), float)
        self.assertTrue(math.isinf(c("Infinity", en_US)))
        self.assert_illegal(c, None)
        self.assert_illegal(c, "blah")

    def test_flag(self):
        c = gnuopts.flag_converter
        self.assertIs(c(None, en_US), True)
        self.assert_illegal(c, "true")
        self.assert_illegal(c, "")

    def test_void(self):
        c = gnuopts.void_converter
        self.assertIsNone(c(None, en_US))
        self.assertIsNone(c("anything", de_DE))

    def test_type_names(self):
        self.assertEqual(gnuopts.string_converter.type_name, "str")
        self.assertEqual(gnuopts.integer_converter.type_name, "int")
        self.assertEqual(gnuopts.long_converter.type_name, "long")
        self.assertEqual(gnuopts.double_converter.type_name, "float")
        self.assertEqual(gnuopts.flag_converter.type_name, "flag")
        self.assertEqual(gnuopts.void_converter.type_name, "void")

    def test_converter_is_abstract(self):
        with self.assertRaises(TypeError):
            gnuopts.Converter()

        class Incomplete(gnuopts.Converter):
            type_name = "incomplete"
        with self.assertRaises(TypeError):
            Incomplete()

        class Upper(gnuopts.Converter):
            type_name = "upper"
            def __call__(self, value, locale):
                return value.upper()
        self.assertEqual(Upper()("abc", en_US), "ABC")

    def test_message_without_option(self):
        with self.assertRaises(gnuopts.IllegalOptionValueError) as cm:
            gnuopts.integer_converter("blah", en_US)
        self.assertEqual(str(cm.exception), "Illegal value 'blah' {expects int}")


class TestLocales(unittest.TestCase):

    def test_resolve_locale(self):
        self.assertIs(gnuopts.resolve_locale(de_DE), de_DE)
        self.assertEqual(gnuopts.resolve_locale("de_DE"), de_DE)
        self.assertEqual(gnuopts.resolve_locale("en-GB"), babel.Locale.parse("en_GB"))
        self.assertIsInstance(gnuopts.resolve_locale(None), babel.Locale)

    def test_resolve_bad_locale(self):
        for locale in ("xx_NOWHERE", 42, ""):
            with self.subTest(locale=locale):
                with self.assertRaises(gnuopts.ConfigurationError):
                    gnuopts.resolve_locale(locale)

    def test_system_locale(self):
        self.assertIsInstance(gnuopts.system_locale(), babel.Locale)


if __name__ == "__main__":
    unittest.main()
