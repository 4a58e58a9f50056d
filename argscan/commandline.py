"""
Argscan command line: typed accessors over the token store.

What this module provides
- CommandLine: wraps an ArgumentStore and a HelpComposer and exposes one
  getter per value type. Every getter has two call shapes:
  • flagged:    get_integer("i", "index", default=0, descr="...")
  • positional: get_integer(1, default=0, descr="...")
  Either flag name may be None (or left out, for the long one); at least one
  is required.

Contract shared by every getter
- A help entry is recorded first, whatever the outcome.
- Nothing found → the default.
- A flag found without a value → True for booleans, the default otherwise.
- A value found → converted; when it does not convert, a diagnostic is printed
  and the default is returned (or the process ends, when escalating).

Quick start
    from argscan import CommandLine

    cli = CommandLine()
    index = cli.get_integer("i", "index", default=0, descr="specifies the index of the item")
    radius = cli.get_double("r", "radius", default=6750.0, descr="the radius of the sphere")
    show = cli.get_boolean("s", "show-image", descr="whether to display the image")
    source = cli.get_string(1, default="", descr="file name of the source image")

    if cli.help_requested(2):
        cli.show_help()

Numbers
- Integers must start with a digit, '+' or '-'; floating-point values may also
  start with '.'. Only the leading numeric run is read: "42abc" is 42.
  Floating-point values also accept hexadecimal notation ("0x1A", "0x1.8p3").

Booleans
- Flagged booleans are flag-only by default: presence means True, and a true
  default is a declaration mistake. With flagonly=False (and for positional
  booleans) the value is one of yes/y/true/t/on/1 or no/n/false/f/off/0.
"""
import math
import re
import struct
import sys

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .faults import *
from .helps import HelpComposer
from .tokens import ArgumentStore, LookupState, shortname, longname
from .utils import *

_INTEGER = re.compile(r"[+-]?[0-9]+")
_HEXREAL = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?")
_REAL = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)", re.IGNORECASE)

TRUES = frozenset({"yes", "y", "true", "t", "on", "1"})
FALSES = frozenset({"no", "n", "false", "f", "off", "0"})


def _integer(value, /):
    if value[0] not in "+-0123456789":
        return Unset
    if match := _INTEGER.match(value):
        try:
            return int(match[0])
        except ValueError:
            # longer than the interpreter allows for str to int conversion
            return Unset
    return Unset


def _double(value, /):
    if value[0] not in ".+-0123456789":
        return Unset
    if match := _HEXREAL.match(value):
        try:
            return float.fromhex(match[0])
        except OverflowError:
            return -math.inf if match[0].startswith("-") else math.inf
    if match := _REAL.match(value):
        return float(match[0])
    return Unset


def _single(value, /):
    # round to the nearest binary32 value; out of range saturates to infinity
    if (number := _double(value)) is Unset:
        return Unset
    try:
        return struct.unpack("f", struct.pack("f", number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


def _boolean(value, /):
    lower = value.lower()
    if lower in TRUES:
        return True
    if lower in FALSES:
        return False
    return Unset


def _flag(short, long):
    if short:
        return shortname(short)
    if long:
        return longname(long)
    return "?"


class CommandLine:
    """
    Typed, declaration-driven access to the process arguments.

    Options
    - strict: declaration mistakes end the process with status 1.
    - escalate: unconvertible user input ends the process with status 1
      (follows strict unless given).
    - colorful / fancy: rich rendering of diagnostics, help and version.

    Ordering
    - Call every flagged getter before the first positional one; positional
      indices are counted over whatever is left in the token list.
    """

    def __init__(self, argv=Unset, /, *, strict=False, escalate=Unset, colorful=False, fancy=False):
        self._store = ArgumentStore(
            coalesce(argv, sys.argv),
            strict=strict,
            escalate=escalate,
            colorful=colorful,
            fancy=fancy,
        )
        self._helps = HelpComposer()
        self._helped = Unset
        self._shown = False

    @property
    def store(self):
        return self._store

    @property
    def helps(self):
        return self._helps

    @property
    def program(self):
        return getattr(__import__("__main__"), "__prog__", self._store.program)

    @property
    def help(self):
        """the rendered help lines (see HelpComposer.render)."""
        return self._helps.render(self.program, self._store.maximum)

    @staticmethod
    def _resolve(keys, caller):
        """split getter keys into (index, short, long); index is Unset for flags."""
        match keys:
            case (int() as index,):
                return index, None, None
            case ():
                return Unset, None, None
            case (short,):
                return Unset, coalesce(short), None
            case (short, long):
                return Unset, coalesce(short), coalesce(long)
        raise TypeError("%s() takes an index or up to two flag names but %d were given" % (caller, len(keys)))

    def _extract(self, keys, default, descr, caller, *, flagonly=False, valued=True):
        """
        record the help entry, then run the matching store lookup.

        a flag found without the value it was declared to take (valued) is
        reported with a MissingValueWarning.
        """
        index, short, long = self._resolve(keys, caller)
        if index is not Unset:
            self._helps.record_positional(index, default, descr)
            return self._store.locate(index), "at %s position" % ordinal(index)
        self._helps.record_flagged(short, long, default, descr, flagonly)
        lookup = self._store.lookup(short, long, flagonly=flagonly)
        if lookup.state is LookupState.PRESENT and valued:
            self._store.trigger(MissingValueWarning(
                "flag %r was given without a value" % _flag(short, long),
                title="missing value",
                code=FaultCode.MISSING_VALUE,
                hint="pass a value after a space (for example: %s <value>)" % _flag(short, long),
                flag=_flag(short, long),
            ))
        return lookup, "after flag %r" % _flag(short, long)

    def _number(self, lookup, subject, parse, default, kind):
        if lookup.state is not LookupState.VALUED or not lookup.value:
            return default
        if (value := parse(lookup.value)) is Unset:
            self._store.trigger(InvalidNumberError(
                "invalid %s %r %s" % (kind, lookup.value, subject),
                title="invalid number",
                code=FaultCode.INVALID_NUMBER,
                hint="numbers start with a digit, '+' or '-'%s; the default %r is used instead" % (
                    " (or '.')" if kind != "integer" else "", default
                ),
                token=lookup.value,
            ))
            return default
        return value

    def get_integer(self, *keys, default=0, descr=""):
        lookup, subject = self._extract(keys, default, descr, "get_integer")
        return self._number(lookup, subject, _integer, default, "integer")

    def get_float(self, *keys, default=0.0, descr=""):
        """single precision: the parsed value is rounded to binary32."""
        lookup, subject = self._extract(keys, default, descr, "get_float")
        return self._number(lookup, subject, _single, default, "number")

    def get_double(self, *keys, default=0.0, descr=""):
        lookup, subject = self._extract(keys, default, descr, "get_double")
        return self._number(lookup, subject, _double, default, "number")

    def get_string(self, *keys, default="", descr=""):
        lookup, _ = self._extract(keys, default, descr, "get_string")
        if lookup.state is LookupState.VALUED and lookup.value:
            return lookup.value
        return default

    def get_boolean(self, *keys, flagonly=True, default=False, descr=""):
        """
        extract a boolean.

        - flagged, flagonly=True: True when the flag is present. A true default
          could never be turned off, so it is reported (FlagOnlyDefaultError)
          and replaced by False.
        - flagged, flagonly=False: the token after the flag is read as a
          yes/no word; a flag without a value still means True.
        - positional: the token is read as a yes/no word.
        """
        index, short, long = self._resolve(keys, "get_boolean")
        flagged = index is Unset
        if flagged and flagonly and default:
            self._store.trigger(FlagOnlyDefaultError(
                "flag-only boolean %r was declared with a true default" % _flag(short, long),
                title="flag-only default",
                code=FaultCode.FLAG_ONLY_DEFAULT,
                hint="declare it with default=False, or pass flagonly=False to accept yes/no values",
                flag=_flag(short, long),
            ))
            default = False

        lookup, subject = self._extract(keys, default, descr, "get_boolean", flagonly=flagged and flagonly, valued=False)
        match lookup.state:
            case LookupState.ABSENT:
                return default
            case LookupState.PRESENT:
                return True

        if not lookup.value:
            return default
        if (value := _boolean(lookup.value)) is Unset:
            self._store.trigger(InvalidBooleanError(
                "invalid boolean %r %s" % (lookup.value, subject),
                title="invalid boolean",
                code=FaultCode.INVALID_BOOLEAN,
                hint="use one of yes/y/true/t/on/1 or no/n/false/f/off/0; the default %r is used instead" % default,
                token=lookup.value,
            ))
            return default
        return value

    def get_argument(self, *keys, default, descr="", flagonly=True):
        """dispatch to the getter matching the type of default."""
        match default:
            case bool():
                return self.get_boolean(*keys, flagonly=flagonly, default=default, descr=descr)
            case int():
                return self.get_integer(*keys, default=default, descr=descr)
            case float():
                return self.get_double(*keys, default=default, descr=descr)
            case str():
                return self.get_string(*keys, default=default, descr=descr)
        raise TypeError("get_argument() default must be a bool, int, float or str")

    def help_requested(self, minimum=Unset, /):
        """
        whether help should be shown.

        true when -h/--help was given, or when the original argument count
        (program name included) is below minimum. the help flag is matched
        (and its entry recorded) only on the first call.
        """
        if self._helped is Unset:
            self._helped = self.get_boolean("h", "help", descr="Show this help message")
        return self._helped or (minimum is not Unset and self._store.argc < minimum)

    def show_help(self):
        """
        Render the help lines to standard output.

        Palette keys
        - usage-label, usage-section, argument-description, panel-title
        - user overrides are read from __main__.__styles__.
        """
        console = Console()
        styles = {
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
            "argument-description": "#9CA3AF",  # Muted gray
            "panel-title": "bold #FF4D94",  # Magenta branding
        } | getattr(__import__('__main__'), "__styles__", {})

        def styler(style):
            return styles.get(style, "") if self._store.colorful else ""

        label, usage, *entries = self.help
        renders = [
            Text(label, styler("usage-label")),
            Text(usage, styler("usage-section")),
            *(Text(entry, styler("argument-description")) for entry in entries),
        ]
        renderable = Group(*renders)

        if self._store.fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{self.program} HELP".upper(), " ", "]", style=styler("panel-title")),
                title_align="left",
            )

        console.print(renderable)
        self._shown = True

    def show_help_on_request(self, minimum=Unset, /):
        """show the help once when it was requested; return whether it was shown."""
        if self.help_requested(minimum) and not self._shown:
            self.show_help()
            return True
        return False

    def show_version(self):
        self._store.show_version()

    def check_validity(self):
        """
        report every flag-looking token nobody extracted.

        returns True when none is left. each leftover is an UnknownFlagError,
        so an escalating command line ends the process on the first one.
        """
        leftovers = self._store.leftovers()
        for token in leftovers:
            self._store.trigger(UnknownFlagError(
                "unknown flag %r in the command line" % token,
                title="unknown flag",
                code=FaultCode.UNKNOWN_FLAG,
                hint="try '%s --help' to see the declared flags" % self.program,
                token=token,
            ))
        return not leftovers


__all__ = (
    "CommandLine",
)
