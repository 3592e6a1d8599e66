#!/usr/bin/env python3

"GNU-style command-line option parsing, with typed values and locale-aware numbers."
__version__ = "0.1"


# please leave this copyright notice in binary distributions.
license = """
gnuopts/__init__.py
part of the gnuopts software package
Copyright 2021-2023 by Larry Hastings
All rights reserved.

Permission is hereby granted, free of charge, to any person obtaining a
copy of this software and associated documentation files (the "Software"),
to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense,
and/or sell copies of the Software, and to permit persons to whom the
Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included
in all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM,
DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT,
TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE
OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.
"""


from abc import abstractmethod, ABCMeta
import babel
import babel.numbers
import big.all as big
from big.itertools import PushbackIterator
import collections
import sys

from . import text


__all__ = [
    "GnuoptsBaseException",
    "ConfigurationError",
    "OptionError",
    "UnknownOptionError",
    "UnknownSuboptionError",
    "NotFlagError",
    "IllegalOptionValueError",

    "Converter",
    "StringConverter",
    "IntegerConverter",
    "LongConverter",
    "DoubleConverter",
    "FlagConverter",
    "VoidConverter",
    "string_converter",
    "integer_converter",
    "long_converter",
    "double_converter",
    "flag_converter",
    "void_converter",

    "Option",
    "Parser",
    "resolve_locale",
    "system_locale",
    ]


class GnuoptsBaseException(Exception):
    pass

class ConfigurationError(GnuoptsBaseException):
    """
    Raised when the gnuopts API is used improperly.
    """
    pass


class OptionError(GnuoptsBaseException):
    """
    Base class for errors found while parsing a command-line.

    str() of any OptionError is a message suitable for
    showing to the user.
    """
    pass

class UnknownOptionError(OptionError):
    """
    Raised when the command-line contains an option
    that isn't registered with the parser.

    option_name is the option as it appeared, e.g. "-u".
    """
    def __init__(self, option_name, message=None):
        self.option_name = option_name
        super().__init__(message or f"Unknown option '{option_name}'")

class UnknownSuboptionError(UnknownOptionError):
    """
    Raised when a group of short options, like "-abcd",
    contains a character that isn't a registered short option.
    """
    def __init__(self, option_name, suboption):
        self.suboption = suboption
        super().__init__(option_name, f"Illegal option: '{suboption}' in '{option_name}'")

class NotFlagError(UnknownOptionError):
    """
    Raised when a group of short options, like "-abcd",
    contains an option that requires a value.  Only
    flags may be grouped together.
    """
    def __init__(self, option_name, option_char):
        self.option_char = option_char
        super().__init__(option_name, f"Illegal option: '{option_name}', '{option_char}' requires a value")

class IllegalOptionValueError(OptionError):
    """
    Raised when an option's value is missing, can't be
    converted, or was supplied to an option that doesn't
    take one.

    value is the offending value (None if it was missing).
    converter is the converter that rejected it.
    option is the Option it was meant for; converters
    don't know their option, so Option fills it in.
    """
    def __init__(self, value, converter=None, option=None):
        self.value = value
        self.converter = converter
        self.option = option
        super().__init__(value)

    def __str__(self):
        fields = [f"Illegal value '{self.value}'"]
        if self.option is not None:
            fields.append(f"for option --{self.option.long_form}")
        if self.converter is not None:
            type_name = getattr(self.converter, "type_name", None) or getattr(self.converter, "__name__", None)
            if type_name:
                fields.append(f"{{expects {type_name}}}")
        return " ".join(fields)


##
## locales
##
## Locales are babel.Locale objects.  Anywhere gnuopts
## accepts a locale you may also pass in an identifier
## string, like "de_DE" or "en-GB".
##

fallback_locale = "en_US_POSIX"

def system_locale():
    """
    Returns the default locale for parsing numbers,
    as named by the environment (LC_ALL, LC_NUMERIC, LANG, ...).

    If the environment doesn't name a locale babel
    knows about, returns the en_US_POSIX locale.
    """
    try:
        identifier = babel.default_locale("LC_NUMERIC")
        if identifier:
            return babel.Locale.parse(identifier)
    except (ValueError, babel.UnknownLocaleError):
        pass
    return babel.Locale.parse(fallback_locale)

def resolve_locale(locale=None):
    if locale is None:
        return system_locale()
    if isinstance(locale, babel.Locale):
        return locale
    if not (locale and isinstance(locale, str)):
        raise ConfigurationError(f"locale must be a babel.Locale or a non-empty str, not {locale!r}")
    try:
        return babel.Locale.parse(locale.replace("-", "_"))
    except (ValueError, TypeError, babel.UnknownLocaleError) as e:
        raise ConfigurationError(f"unknown locale {locale!r}") from e


##
## converters
##
## A converter turns the str value of an option into
## its Python value.  Any callable with this signature
## works as a converter:
##
##     converter(value, locale) -> object
##
## value is the str from the command-line, or None if
## the option was given no value.  locale is a babel.Locale.
## To reject a value, raise IllegalOptionValueError
## (ValueError works too; Option converts it for you).
##

class Converter(metaclass=ABCMeta):
    """
    Base class for the built-in converters.

    type_name is used in error messages.
    """
    type_name = None

    @abstractmethod
    def __call__(self, value, locale):
        ...

    def __repr__(self):
        return f"<{self.__class__.__name__}>"


class StringConverter(Converter):
    type_name = "str"

    def __call__(self, value, locale):
        if value is None:
            raise IllegalOptionValueError(value, self)
        return value


class IntegerConverter(Converter):
    """
    Converts a value to an int, honoring the digit
    grouping symbol of the locale ("1,000" in en_US,
    "1.000" in de_DE).  Rejects values that don't fit
    in a signed 32-bit integer.
    """
    type_name = "int"
    minimum = -(2 ** 31)
    maximum = (2 ** 31) - 1

    def __call__(self, value, locale):
        if value is None:
            raise IllegalOptionValueError(value, self)
        try:
            i = babel.numbers.parse_number(value, locale)
        except babel.numbers.NumberFormatError as e:
            raise IllegalOptionValueError(value, self) from e
        if not (self.minimum <= i <= self.maximum):
            raise IllegalOptionValueError(value, self)
        return i


class LongConverter(IntegerConverter):
    "Like IntegerConverter, but the range is a signed 64-bit integer."
    type_name = "long"
    minimum = -(2 ** 63)
    maximum = (2 ** 63) - 1


class DoubleConverter(Converter):
    """
    Converts a value to a float, honoring the decimal
    and grouping symbols of the locale ("0.2" in en_US,
    "0,2" in de_DE).
    """
    type_name = "float"

    def __call__(self, value, locale):
        if value is None:
            raise IllegalOptionValueError(value, self)
        try:
            return float(babel.numbers.parse_decimal(value, locale))
        except babel.numbers.NumberFormatError as e:
            raise IllegalOptionValueError(value, self) from e


class FlagConverter(Converter):
    type_name = "flag"

    def __call__(self, value, locale):
        # flags never take a value.
        if value is not None:
            raise IllegalOptionValueError(value, self)
        return True


class VoidConverter(Converter):
    type_name = "void"

    def __call__(self, value, locale):
        return None


string_converter = StringConverter()
integer_converter = IntegerConverter()
long_converter = LongConverter()
double_converter = DoubleConverter()
flag_converter = FlagConverter()
void_converter = VoidConverter()


def split_forms(forms):
    """
    Registration methods accept either (long_form,)
    or (short_form, long_form).  Returns a tuple
    (short_form, long_form), with short_form None
    if it wasn't specified.
    """
    if len(forms) == 1:
        return None, forms[0]
    if len(forms) == 2:
        return tuple(forms)
    raise ConfigurationError(f"expected (long_form) or (short_form, long_form), got {forms!r}")


class Option:
    """
    A single command-line option.

    Every option has a long form ("verbose", spelled
    "--verbose" on the command-line), and optionally
    a one-character short form ("v", spelled "-v").

    Each time the option appears on the command-line,
    the parser converts its value and appends it to a queue.
    get_value() pops values from the front of the queue,
    get_values() drains the whole queue.  Values stay queued
    across calls to Parser.parse() until you read them.

    wants_value is true if the option must be given a value
    (either "--name=value" or the next argument).  Options
    with a default argument never want a value.
    """

    def __init__(self, long_form, converter, *, short_form=None, wants_value=True, help=None):
        if not (long_form and isinstance(long_form, str)):
            raise ConfigurationError(f"Option: long_form must be a non-empty str, not {long_form!r}")
        if long_form.startswith("-") or ("=" in long_form):
            raise ConfigurationError(f"Option: {long_form!r} is not a legal long form")
        if short_form is not None:
            if not (isinstance(short_form, str)
                and (len(short_form) == 1)
                and (short_form not in "-=")
                and (not short_form.isspace())):
                raise ConfigurationError(f"Option: {short_form!r} is not a legal short form")
        if not callable(converter):
            raise ConfigurationError(f"Option: converter {converter!r} isn't callable")

        self._short_form = short_form
        self._long_form = long_form
        self._wants_value = bool(wants_value)
        self._converter = converter
        self._help = help or ""

        self.default_argument = None
        self.locale = None
        self.values = collections.deque()
        self.found = False

    def __repr__(self):
        if self._short_form is None:
            return f"<Option --{self._long_form}>"
        return f"<Option -{self._short_form}, --{self._long_form}>"

    @property
    def short_form(self):
        return self._short_form

    @property
    def long_form(self):
        return self._long_form

    @property
    def wants_value(self):
        return self._wants_value

    @property
    def converter(self):
        return self._converter

    @property
    def help(self):
        return self._help

    def add_default_argument(self, default_argument):
        """
        Sets the str value used when the option has no
        queued values (or was given a value that failed
        to convert).  The default argument is converted
        lazily, when it's needed.

        An option with a default argument no longer
        requires a value on the command-line.
        """
        self.default_argument = default_argument
        self._wants_value = False

    def is_found(self):
        return self.found

    def _convert(self, value, locale):
        try:
            return self._converter(value, locale)
        except IllegalOptionValueError as e:
            if e.option is None:
                e.option = self
            raise
        except ValueError as e:
            raise IllegalOptionValueError(value, self._converter, self) from e

    def get_value(self, default=None):
        """
        Pops and returns the oldest queued value.

        If no values are queued, returns the converted
        default argument.  If there's no default argument,
        or it fails to convert, returns default.

        Never raises IllegalOptionValueError.  Converters must
        signal a bad default argument with IllegalOptionValueError
        or ValueError; any other exception propagates.
        """
        if self.values:
            return self.values.popleft()
        if self.default_argument is None:
            return default
        locale = self.locale or system_locale()
        try:
            return self._convert(self.default_argument, locale)
        except IllegalOptionValueError:
            return default

    def get_values(self):
        "Returns all the queued values as a list, and empties the queue."
        values = list(self.values)
        self.values.clear()
        return values

    def add_value(self, value, locale):
        """
        Converts value and appends it to the queue.
        Called by Parser.parse().

        If the conversion fails and the option has a
        default argument, queues the converted default
        argument instead.  Otherwise raises
        IllegalOptionValueError.
        """
        self.locale = locale
        try:
            converted = self._convert(value, locale)
        except IllegalOptionValueError:
            if self.default_argument is None:
                raise
            converted = self._convert(self.default_argument, locale)
        self.values.append(converted)

    def usage_line(self, *, indent='', width=None):
        return text.format_option(self, indent=indent, width=width)


class Parser:
    """
    A largely GNU-compatible command-line option parser.

    Supports short options (-v), long options (--verbose),
    options with values (-d 2, --debug 2, --debug=2),
    grouped short flags (-abc), and "--" to explicitly
    end option processing.

    Register your options with the add_*_option methods,
    call parse(), then read values from the Option objects.
    """

    def __init__(self):
        # maps "-v" and "--verbose" to the same Option.
        # dicts preserve insertion order, which is
        # the order options appear in the usage text.
        self.options = {}
        self.remaining_args = []

        self.usage_preamble = ""
        self.usage_postscript = ""
        self.option_indent = None
        self.usage_width = None

        self.log = big.Log()

    def add_option(self, option):
        "Registers option with this parser, and returns it."
        spellings = []
        if option.short_form is not None:
            spellings.append("-" + option.short_form)
        spellings.append("--" + option.long_form)
        for spelling in spellings:
            existing = self.options.get(spelling)
            if existing is not None:
                raise ConfigurationError(f"{spelling} is already defined by {existing!r}")
        for spelling in spellings:
            self.options[spelling] = option
        return option

    def _add(self, forms, wants_value, converter, help):
        short_form, long_form = split_forms(forms)
        option = Option(long_form, converter, short_form=short_form, wants_value=wants_value, help=help)
        return self.add_option(option)

    def add_string_option(self, *forms, help=None):
        return self._add(forms, True, string_converter, help)

    def add_optional_string_option(self, *forms, help=None):
        """
        Adds a str option that doesn't consume the next
        argument.  Give it a value with --name=value,
        or give it a default argument.
        """
        return self._add(forms, False, string_converter, help)

    def add_integer_option(self, *forms, help=None):
        return self._add(forms, True, integer_converter, help)

    def add_optional_integer_option(self, *forms, help=None):
        return self._add(forms, False, integer_converter, help)

    def add_long_option(self, *forms, help=None):
        return self._add(forms, True, long_converter, help)

    def add_optional_long_option(self, *forms, help=None):
        return self._add(forms, False, long_converter, help)

    def add_double_option(self, *forms, help=None):
        return self._add(forms, True, double_converter, help)

    def add_optional_double_option(self, *forms, help=None):
        return self._add(forms, False, double_converter, help)

    def add_boolean_option(self, *forms, help=None):
        "Adds a flag.  Each appearance on the command-line queues True."
        return self._add(forms, False, flag_converter, help)

    def add_void_option(self, *forms, help=None):
        """
        Adds an option that never needs a value,
        like --help.  Its values are always None;
        use is_found() to see if it was specified.
        """
        return self._add(forms, False, void_converter, help)

    def add_user_defined_option(self, *forms, converter, help=None):
        """
        Adds an option that requires a value, converted
        by your own converter.  See the notes on
        converters above for the signature.
        """
        return self._add(forms, True, converter, help)

    def distinct_options(self):
        "Returns a list of the registered options, in registration order."
        return list(dict.fromkeys(self.options.values()))

    def get_remaining_args(self):
        "Returns the non-option arguments from the last parse()."
        return list(self.remaining_args)

    def parse(self, args, locale=None):
        """
        Processes args, a sequence of command-line arguments
        (not including the program name).

        Option values are converted and queued on their
        Option objects.  Non-option arguments are saved,
        and available from get_remaining_args().

        locale is used to convert values; if not specified,
        uses the system default.

        Raises an OptionError subclass on the first error.
        Options processed before the error keep their values.
        """
        locale = resolve_locale(locale)

        self.log.reset()
        self.log(f"parse start, locale {locale}")

        self.remaining_args = []
        for option in self.distinct_options():
            option.found = False

        remaining = []
        iterator = PushbackIterator(args)

        for a in iterator:
            if a == "--":
                self.log("'--', ending option processing")
                remaining.extend(iterator)
                break

            # "-" by itself is the old UNIX idiom for stdin/stdout,
            # it's a positional argument.
            if (not a.startswith("-")) or (a == "-"):
                remaining.append(a)
                continue

            # value attached with '=' is pushed back onto
            # the iterator, so "--size=3" is handled like "--size 3".
            # flags consume it too, and reject it.
            has_value = False
            if a.startswith("--"):
                a, equals, split_value = a.partition("=")
                if equals:
                    iterator.push(split_value)
                    has_value = True
            elif len(a) > 2:
                self._parse_grouped_flags(a, locale)
                continue

            option = self.options.get(a)
            if option is None:
                raise UnknownOptionError(a)

            value = None
            if has_value or option.wants_value:
                value = next(iterator, None)
            self.log(f"option {a} value {value!r}")
            option.add_value(value, locale)
            option.found = True

        self.remaining_args = remaining
        self.log("parse complete")

    def _parse_grouped_flags(self, a, locale):
        self.log.enter(f"grouped flags {a}")
        try:
            for c in a[1:]:
                option = self.options.get("-" + c)
                if option is None:
                    raise UnknownSuboptionError(a, c)
                if option.wants_value:
                    raise NotFlagError(a, c)
                self.log(f"option -{c}")
                option.add_value(None, locale)
                option.found = True
        finally:
            self.log.exit()

    def set_usage_preamble(self, usage_preamble):
        self.usage_preamble = usage_preamble

    def set_usage_postscript(self, usage_postscript):
        self.usage_postscript = usage_postscript

    def set_option_indent(self, option_indent):
        self.option_indent = option_indent

    def set_usage_width(self, usage_width):
        """
        If usage_width is set, help text is wrapped
        so usage lines don't exceed usage_width columns.
        """
        self.usage_width = usage_width

    def get_usage(self):
        return text.format_usage(
            self.distinct_options(),
            preamble=self.usage_preamble,
            postscript=self.usage_postscript,
            indent=self.option_indent,
            width=self.usage_width,
            )

    def print_usage(self, file=None):
        "Prints the usage text to file, by default sys.stderr."
        if file is None:
            file = sys.stderr
        print(self.get_usage(), end="", file=file)

    def main(self, args=None, locale=None):
        """
        Parses args (by default, sys.argv[1:]) and returns
        the remaining arguments.

        On an error, prints the error message and the usage
        text to stderr and exits with status 2.
        """
        if args is None:
            args = sys.argv[1:]
        try:
            self.parse(args, locale)
        except OptionError as e:
            print(f"error: {e}", file=sys.stderr)
            self.print_usage()
            sys.exit(2)
        return self.get_remaining_args()
