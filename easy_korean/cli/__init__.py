"""Command line interface for easy-korean.

* :mod:`easy_korean.cli.args` builds the parser for the ``lookup``, ``daily``,
  ``language`` and ``speak`` sub-commands.
* :mod:`easy_korean.cli.commands` loads configuration, opens the cache file and
  runs the lookup, preference and speech services.
* :mod:`easy_korean.cli.main` is the console-script entry point.
"""

from . import args, commands

__all__ = ["args", "commands"]
