"""
Argscan faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every diagnostic the
  parser can emit. Codes are grouped by category so logs stay searchable.
- ArgumentFault / ArgumentWarning: base types that carry message + options and
  know how to render themselves with rich in a short, lowercased, actionable way.
- trigger(): central entry point to surface any fault.

Categories
- usage faults (programmer mistakes in the declarations): fatal only when the
  store is strict, otherwise the accessor falls back to its default.
- format faults (the user typed something that does not convert): fatal only
  when the store escalates, otherwise the accessor falls back to its default.
- warnings: never fatal; structural ones are shown at most once per store.

Integration
- The store merges its own options (program, strict/escalate outcome, colorful,
  fancy) into the fault and calls trigger(fault). Nothing is raised across the
  extraction boundary; a fatal fault ends the process with status 1.
"""
import copy
import sys
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping
    - usage (211xx)
      • MISSING_FLAG_NAMES, MALFORMED_LONG_FLAG, FLAG_ONLY_DEFAULT, INVALID_INDEX
    - format (221xx)
      • INVALID_NUMBER, INVALID_BOOLEAN, UNKNOWN_FLAG
    - warnings (231xx)
      • OUT_OF_ORDER_EXTRACTION, UNKNOWN_FLAGS, MISSING_VALUE
    """
    # --- usage errors (21xxx) ---
    MISSING_FLAG_NAMES          = 21101
    MALFORMED_LONG_FLAG         = 21102
    FLAG_ONLY_DEFAULT           = 21103
    INVALID_INDEX               = 21104

    # --- format errors (22xxx) ---
    INVALID_NUMBER              = 22101
    INVALID_BOOLEAN             = 22102
    UNKNOWN_FLAG                = 22103

    # --- warnings (23xxx) ---
    OUT_OF_ORDER_EXTRACTION     = 23101
    UNKNOWN_FLAGS               = 23102
    MISSING_VALUE               = 23103

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _program(options):
    return getattr(__import__("__main__"), "__prog__", options.get("program") or "argscan")


def _renderable(fault, palette, kind):
    """
    build the rich renderable shared by errors and warnings.

    layout
    - header: "[ <program> — <code> | <Title> ]"
    - body: the message, then "→ <hint>" when a hint is present.
    - fancy: the body goes into a Panel titled by the header.
    """
    options = fault.options
    colorful = options.get("colorful", False)
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    code = options.get("code")
    header = Text.assemble(
        "[ ",
        text(_program(options), styler("prog-name")),
        " — ",
        text(code.normalize() if code is not None else "?", styler("code")),
        " | ",
        text(str(options.get("title", kind)).title(), styler(kind + "-title")),
        " ]"
    )
    renders = [text(fault.message, styler(kind + "-message"))]
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")

    return Group(header, *renders)


class ArgumentFault(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _renderable(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error")

    def __trigger__(self) -> None:
        console.print(self)
        if self.options.get("fatal", False):
            sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UsageError(ArgumentFault): ...
class MissingFlagNamesError(UsageError): ...
class MalformedLongFlagError(UsageError): ...
class FlagOnlyDefaultError(UsageError): ...
class InvalidIndexError(UsageError): ...


class FormatError(ArgumentFault): ...
class InvalidNumberError(FormatError): ...
class InvalidBooleanError(FormatError): ...
class UnknownFlagError(FormatError): ...


class ArgumentWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _renderable(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning")

    def __trigger__(self) -> None:
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class OutOfOrderExtractionWarning(ArgumentWarning): ...
class UnknownFlagsWarning(ArgumentWarning): ...
class MissingValueWarning(ArgumentWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - the fault is printed to the stderr console; a fault whose merged options
      carry fatal=True then ends the process with status 1.

    typical options
    - program, title, code, hint, colorful, fancy, fatal, and any other context
      the reporter may want to keep (token, index, flag).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "ArgumentFault",
    "UsageError",
    "MissingFlagNamesError",
    "MalformedLongFlagError",
    "FlagOnlyDefaultError",
    "InvalidIndexError",
    "FormatError",
    "InvalidNumberError",
    "InvalidBooleanError",
    "UnknownFlagError",
    "ArgumentWarning",
    "OutOfOrderExtractionWarning",
    "UnknownFlagsWarning",
    "MissingValueWarning",
    "FaultCode",
    "trigger",
)
