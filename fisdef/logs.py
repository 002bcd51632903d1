"""Logging setup shared by the command line tool."""

import logging

# Finer than DEBUG, for per-record detail
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def init_logging(verbose: int = 0, quiet: bool = False) -> None:
    """
    Configure the root logger for a run.

    INFO by default, DEBUG with -v and TRACE with -vv. Quiet mode overrules
    verbosity and only lets critical errors through.
    """
    if quiet:
        level = logging.CRITICAL
    elif verbose >= 2:
        level = TRACE
    elif verbose == 1:
        level = logging.DEBUG
    else:
        level = logging.INFO

    fmt = "%(levelname)-7s %(message)s" if verbose > 0 else "%(message)s"
    logging.basicConfig(level=level, format=fmt, force=True)
