__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'argscan'
__author__ = 'Dennis'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.9.0"

from .commandline import *
from .faults import *
from .helps import *
from .tokens import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 9, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the command line accessors
__all__ += commandline.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the help composer
__all__ += helps.__all__  # type: ignore[attr-defined]
# Load the exposed API of the token store
__all__ += tokens.__all__  # type: ignore[attr-defined]
