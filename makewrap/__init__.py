"""makewrap: annotate recursive make output with the directory make was in.

Runs ``make`` as a subprocess, follows its ``Entering directory`` and
``Leaving directory`` announcements, and prefixes compiler diagnostics
with the tracked directory so every reported path can be opened directly.
"""

__version__ = "0.1.0"
__description__ = "Streaming make output filter that makes diagnostic paths unambiguous"

from makewrap.core.interpreter import LineInterpreter
from makewrap.core.runner import BuildRunner

__all__ = ["LineInterpreter", "BuildRunner", "__version__"]
