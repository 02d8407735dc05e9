import logging
from dataclasses import dataclass, asdict, replace

logger = logging.getLogger(__name__)

EQUALITY_MODES = ('structural', 'loose', 'strict')


@dataclass(frozen=True)
class LazinqConfig:
    """process wide defaults used when an operator gets no explicit argument"""
    default_equality: str = 'structural'  # structural, loose, strict
    trace_level: int = logging.DEBUG
    trace_logger: str = 'lazinq.trace'

    def __post_init__(self):
        if self.default_equality not in EQUALITY_MODES:
            raise ValueError(f"unknown equality mode '{self.default_equality}', expected one of {EQUALITY_MODES}")
        if not isinstance(self.trace_level, int):
            raise ValueError(f"trace_level must be a logging level, got {self.trace_level!r}")


_active = LazinqConfig()


def get_config() -> LazinqConfig:
    return _active


def configure(**changes) -> LazinqConfig:
    """replace selected fields of the active configuration"""
    global _active
    _active = replace(_active, **changes)
    logger.debug(f"config: {asdict(_active)}")
    return _active


def reset_config() -> LazinqConfig:
    global _active
    _active = LazinqConfig()
    return _active
