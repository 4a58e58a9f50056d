"""
Argscan help composer.

Every typed accessor records one entry here before it touches the token
list, so the help text describes exactly what the program declared, in
declaration order, whether or not the user supplied anything.

Layout of render(program, maximum)
    Help Message: Usage of <program>
    <program> [argument1] [argument2] [argument3] ... [-i/--index val] [-s/--show]
        -i/--index val : the item index (default value: 0)
        -s/--show : display the image (default value: false)
        argument1: source file
"""
from .tokens import shortname, longname
from .utils import mirror

INDENT = " " * 4


def _stringify(default, /):
    if isinstance(default, bool):
        return "true" if default else "false"
    return str(default)


def _describe(head, descr, default):
    line = head + descr
    if default := _stringify(default):
        line += " (default value: %s)" % default
    return line


class HelpComposer:
    entries = mirror("entries")
    summary = mirror("summary")

    def __init__(self):
        self._entries = []
        self._summary = []

    def record_flagged(self, short, long, default, descr, flagonly=False):
        """
        record "-s/--long[ val] : descr (default value: D)".

        the bracketed "[-s/--long[ val]]" fragment also joins the usage line.
        absent names (None) are left out of the spelling.
        """
        names = []
        if short:
            names.append(shortname(short))
        if long:
            names.append(longname(long))
        spelling = "/".join(names)
        if not flagonly:
            spelling += " val"

        self._summary.append("[" + spelling + "]")
        self._entries.append(_describe(spelling + " : ", descr, default))

    def record_positional(self, index, default, descr):
        """record "argument<N>: descr (default value: D)"."""
        self._entries.append(_describe("argument%d: " % index, descr, default))

    def render(self, program, maximum, /):
        """
        return the help text as a list of lines.

        - maximum is the largest positional index ever requested; up to three
          placeholders are shown, followed by "..." when more were requested.
        - rendering never mutates the composer, so repeated calls agree.
        """
        usage = [program]
        usage.extend("[argument%d]" % index for index in range(1, min(maximum, 3) + 1))
        if maximum > 3:
            usage.append("...")
        usage.extend(self._summary)

        lines = ["Help Message: Usage of " + program, " ".join(usage)]
        lines.extend(INDENT + entry for entry in self._entries)
        return lines


__all__ = (
    "HelpComposer",
)
