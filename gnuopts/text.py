# please leave this copyright notice in binary distributions.
license = """
gnuopts/text.py
part of the gnuopts software package
Copyright 2021 by Larry Hastings
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


##
## Usage lines look like this:
##
##     -v, --verbose === enable verbose [optional]
##     --size === enter size (required)
##
## "(required)" means the option must be given a value,
## "[optional]" means it needn't be.
##

separator = " === "
required_marker = " (required)"
optional_marker = " [optional]"
line_separator = "\n"


def presplit_textwrap(words, margin=79):
    """
    Combines "words" into lines and returns the result as a string.

    "words" should be an iterator containing pre-split text.

    "margin" specifies the maximum length of each line.
    A word longer than "margin" gets a line to itself.
    Words are separated by one space.

    An empty word forces a line break.
    """

    col = 0
    text = []

    for word in words:
        l = len(word)

        if not l:
            col = 0
            text.append('\n')
            continue

        if (l + 1 + col) > margin:
            if col:
                text.append('\n')
                col = 0
        elif col:
            text.append(" ")
            col += 1

        text.append(word)
        col += l

    return "".join(text)


def format_option(option, *, indent='', width=None):
    """
    Returns the usage line for option, without a trailing newline.

    If width is true, the help text is wrapped so no line
    is longer than width; continuation lines are indented
    to line up with the start of the help text.
    """
    indent = indent or ''
    if option.short_form is not None:
        spellings = f"-{option.short_form}, --{option.long_form}"
    else:
        spellings = f"--{option.long_form}"
    head = f"{indent}{spellings}{separator}"
    marker = required_marker if option.wants_value else optional_marker
    body = option.help + marker

    if not width:
        return head + body

    margin = max(width - len(head), 1)
    lines = presplit_textwrap(body.split(), margin).split('\n')
    continuation = line_separator + (" " * len(head))
    return head + continuation.join(lines)


def format_usage(options, *, preamble='', postscript='', indent=None, width=None):
    """
    Renders the usage text for an iterable of options:
    the preamble, one line per option, then the postscript.
    """
    text = [preamble or '']
    for option in options:
        text.append(format_option(option, indent=indent, width=width))
        text.append(line_separator)
    if postscript:
        text.append(postscript)
    return "".join(text)
