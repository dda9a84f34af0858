import logging
from typing import Callable, Optional, TypeVar

from fle.options.datakey import DataKeyOptions, DataKeyOptionsBuilder

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OptionsError(Exception):
    """Raised when a deferred option fails while being applied."""

    def __init__(self, message: str, index: int):
        super().__init__(message)
        self.index = index


def resolve_options(factory: Callable[[], T], *builders) -> T:
    """Apply the setters of each builder, in order, to a fresh record.

    Builders given as None are skipped. Resolution stops at the first
    setter that raises; the partially built record is dropped and an
    OptionsError chained to the original exception is raised instead.
    """
    opts = factory()
    applied = 0
    for builder in builders:
        if builder is None:
            continue
        for setter in builder.list():
            try:
                setter(opts)
            except Exception as e:
                logger.warning("Option %d for %s failed: %s", applied, type(opts).__name__, e)
                raise OptionsError(f"failed to apply option {applied}: {e}", applied) from e
            applied += 1

    logger.debug("Resolved %s from %d option(s)", type(opts).__name__, applied)
    return opts


def resolve_data_key_options(*builders: Optional[DataKeyOptionsBuilder]) -> DataKeyOptions:
    return resolve_options(DataKeyOptions, *builders)
