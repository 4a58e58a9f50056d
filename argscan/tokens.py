"""
Argscan token store: the single-pass parsing and extraction engine.

What this module provides
- ArgumentStore: owns the working list of raw argument tokens and consumes it.
  • Construction copies the argument vector and expands short-flag clusters
    ("-xzv" → "-x -z -v", "-n42" → "-n 42").
  • lookup(short, long): locate a flag, remove it (and its value token) and
    report what was found.
  • locate(index): read the N-th positional token among what is left.
- Lookup / LookupState: the tri-state result of every extraction
  (absent, present without a value, present with a value).
- shortname()/longname(): canonical flag spellings shared with the help layer.

Ordering contract
- Positional indices are counted over the tokens that remain at call time, so
  every flagged extraction must happen before the first positional one. The
  store only warns (once) when it sees evidence of the opposite.

Reserved tokens
- "-h"/"--help" are never reported as unknown flags during positional scans.
- "--argscan-version" is stripped at construction and prints the version banner.
"""
import re
from collections import namedtuple
from collections.abc import Iterable
from enum import IntEnum

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .faults import *
from .utils import *

HELP_FLAGS = ("-h", "--help")
VERSION_FLAG = "--argscan-version"


class LookupState(IntEnum):
    ABSENT = 0
    PRESENT = 1
    VALUED = 2


class Lookup(namedtuple("Lookup", ("state", "value"), defaults=(None,))):
    """
    Result of a store extraction.

    - state is ABSENT: nothing matched (value is None).
    - state is PRESENT: the flag matched but carried no value (value is None).
    - state is VALUED: value holds the consumed token (possibly a single space,
      which is a legitimate value and not a marker).

    A Lookup is truthy unless it is ABSENT.
    """
    __slots__ = ()

    def __bool__(self):
        return self.state is not LookupState.ABSENT


ABSENT = Lookup(LookupState.ABSENT)
PRESENT = Lookup(LookupState.PRESENT)


def shortname(name, /):
    """canonical short spelling: "x" → "-x", "-x" stays."""
    return name if name.startswith("-") else "-" + name


def longname(name, /):
    """canonical long spelling: "name" → "--name", "--name" stays."""
    return name if name.startswith("-") else "--" + name


def _expand(tokens):
    """
    Expand combined short-flag clusters into individual flags.

    A token qualifies when it starts with a single hyphen followed by an ASCII
    letter and is longer than two characters. The leading letter run becomes
    one "-x" token per letter; whatever follows the run (starting at the first
    non-letter) is kept as one residual token right after them. The program
    name at position 0 is never expanded.
    """
    expanded = list(tokens[:1])
    for token in tokens[1:]:
        if len(token) > 2 and (match := re.fullmatch(r"-([A-Za-z]+)(.*)", token, re.DOTALL)):
            expanded.extend("-" + letter for letter in match[1])
            if match[2]:
                expanded.append(match[2])
        else:
            expanded.append(token)
    return expanded


class ArgumentStore:
    """
    Mutable token list with the two extraction primitives.

    Options
    - strict: usage faults (bad declarations) end the process with status 1.
    - escalate: format faults (bad user input) end the process with status 1;
      follows strict when not given.
    - colorful / fancy: rich rendering of diagnostics and the version banner.

    Lifecycle
    - One store per process invocation. Every extraction mutates it in place;
      it is not meant to be copied or reused, nor shared between threads.
    """

    tokens = mirror("tokens")

    def __init__(self, argv, /, *, strict=False, escalate=Unset, colorful=False, fancy=False):
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("ArgumentStore() argument must be an iterable of strings")
        tokens = list(argv)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("ArgumentStore() argument must be an iterable of strings")

        self.strict = bool(strict)
        self.escalate = bool(coalesce(escalate, strict))
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)

        self._argc = len(tokens)
        self._tokens = _expand(tokens)
        self._positioned = False
        self._maximum = 0
        self._warned = set()

        if VERSION_FLAG in self._tokens[1:]:
            self._tokens[1:] = [token for token in self._tokens[1:] if token != VERSION_FLAG]
            self.show_version()

    @property
    def argc(self):
        """original argument count, program name included."""
        return self._argc

    @property
    def program(self):
        return self._tokens[0] if self._tokens else ""

    @property
    def maximum(self):
        """largest positional index requested so far."""
        return self._maximum

    @property
    def positioned(self):
        """whether positional extraction has begun."""
        return self._positioned

    def trigger(self, fault, /, **options):
        """
        surface a fault with this store's options merged in.

        usage faults are fatal when strict, format faults when escalating,
        warnings never are.
        """
        if isinstance(fault, UsageError):
            fatal = self.strict
        elif isinstance(fault, FormatError):
            fatal = self.escalate
        else:
            fatal = False
        trigger(fault, **options, program=self.program, colorful=self.colorful, fancy=self.fancy, fatal=fatal)

    def _warn(self, warning, /):
        # structural warnings are shown at most once per store
        if type(warning) in self._warned:
            return
        self._warned.add(type(warning))
        self.trigger(warning)

    def lookup(self, short=None, long=None, /, *, flagonly=False):
        """
        locate a flag, consume it and return what was found.

        parameters
        - short / long: flag names with or without their leading hyphens;
          None (or omitted) marks an absent name. At least one is required.
        - flagonly: never consume a value token after the flag.

        returns
        - ABSENT when neither spelling is in the list (nothing is removed).
        - PRESENT when the flag matched and flagonly is set, or no usable value
          token follows it.
        - Lookup(VALUED, token) when the following non-empty token was consumed.

        faults
        - MissingFlagNamesError when both names are absent.
        - MalformedLongFlagError when the long name has a single leading hyphen.
        """
        short, long = coalesce(short) or None, coalesce(long) or None
        for name in (short, long):
            if name is not None and not isinstance(name, str):
                raise TypeError("lookup() flag names must be strings")

        if short is None and long is None:
            self.trigger(MissingFlagNamesError(
                "no short or long flag name was declared",
                title="missing flag names",
                code=FaultCode.MISSING_FLAG_NAMES,
                hint="declare at least one of the short ('x') or long ('name') spellings",
            ))
            return ABSENT

        if long is not None and long.startswith("-") and not long.startswith("--"):
            self.trigger(MalformedLongFlagError(
                "long flag %r is spelled with a single hyphen" % long,
                title="malformed long flag",
                code=FaultCode.MALFORMED_LONG_FLAG,
                hint="use a double hyphen (--%s) or no hyphen at all (%s)" % (long[1:], long[1:]),
                flag=long,
            ))
            return ABSENT

        if self._positioned and not flagonly:
            self._warn(OutOfOrderExtractionWarning(
                "flagged arguments were extracted after positional ones",
                title="out of order extraction",
                code=FaultCode.OUT_OF_ORDER_EXTRACTION,
                hint="extract every flagged argument before the first positional argument",
            ))

        names = set()
        if short is not None:
            names.add(shortname(short))
        if long is not None:
            names.add(longname(long))

        for index in range(1, len(self._tokens)):
            if self._tokens[index] not in names:
                continue
            del self._tokens[index]
            # the token after the flag now sits at the same index
            if not flagonly and index < len(self._tokens) and self._tokens[index]:
                return Lookup(LookupState.VALUED, self._tokens.pop(index))
            return PRESENT
        return ABSENT

    def locate(self, index, /):
        """
        return the index-th (1-based) positional token among what is left.

        tokens starting with a hyphen are skipped (they are unknown flags, or
        flags not extracted yet); the program name is never counted. the list
        is not modified.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError("locate() argument must be an integer")

        self._positioned = True
        self._maximum = max(self._maximum, index)

        if index < 1:
            self.trigger(InvalidIndexError(
                "positional index %d is not valid" % index,
                title="invalid positional index",
                code=FaultCode.INVALID_INDEX,
                hint="positional arguments are counted from 1",
                index=index,
            ))
            return ABSENT

        count = 0
        for token in self._tokens[1:]:
            if token.startswith("-"):
                if token not in HELP_FLAGS:
                    self._warn(UnknownFlagsWarning(
                        "token %r looks like a flag but was never extracted" % token,
                        title="unknown flags",
                        code=FaultCode.UNKNOWN_FLAGS,
                        hint="it is either unknown, or positional arguments were read before all flagged ones",
                        token=token,
                    ))
                continue
            count += 1
            if count == index:
                return Lookup(LookupState.VALUED, token)
        return ABSENT

    def leftovers(self):
        """hyphen-prefixed tokens still in the list, help flags excluded."""
        return [token for token in self._tokens[1:] if token.startswith("-") and token not in HELP_FLAGS]

    def show_version(self):
        """
        Render the library version banner to standard output.

        Palette keys
        - program-name, program-version, panel-title
        - user overrides are read from __main__.__styles__.
        """
        from . import __title__, __version__

        console = Console()
        styles = {
            "program-name": "bold #FF4D94",  # Magenta-pink brand pop
            "program-version": "bold #00E6FF",  # Cyan version (clear contrast)
            "panel-title": "bold #FF4D94",
        } | getattr(__import__('__main__'), "__styles__", {})

        def styler(style):
            return styles.get(style, "") if self.colorful else ""

        renderable = Text(" — ").join((
            Text(__title__, styler("program-name")),
            Text(__version__, styler("program-version")),
        ))

        if self.fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{__title__} VERSION".upper(), " ", "]", style=styler("panel-title")),
                title_align="left",
            )

        console.print(renderable)


__all__ = (
    "ArgumentStore",
    "Lookup",
    "LookupState",
    "ABSENT",
    "PRESENT",
    "HELP_FLAGS",
    "VERSION_FLAG",
    "shortname",
    "longname",
)
