"""Regularization penalties and their canonical parser."""

from __future__ import annotations

from enum import Enum

from .errors import InvalidConfigurationError


class Penalty(str, Enum):
    """Regularization applied on top of the loss.

    ``lambda`` is the strength of the L2 term, or of the only term for
    ``l1``/``l2``. ``gamma`` is the strength of the L1 term and is only
    read under ``en`` (elastic net).
    """

    NONE = 'none'
    L1 = 'l1'
    L2 = 'l2'
    ELASTIC_NET = 'en'

    def __str__(self) -> str:
        return self.value


PENALTY_ALIASES: dict[str, Penalty] = {
    'none': Penalty.NONE,
    'l1': Penalty.L1,
    'l2': Penalty.L2,
    'en': Penalty.ELASTIC_NET,
    'elastic-net': Penalty.ELASTIC_NET,
    'elastic_net': Penalty.ELASTIC_NET,
    'elasticnet': Penalty.ELASTIC_NET,
}


def parse_penalty(value: Penalty | str | None) -> Penalty:
    """
    Coerce a penalty given as enum member, string or ``None``.

    Args:
        value: ``Penalty`` member, one of the names in ``PENALTY_ALIASES``
            (case-insensitive), or ``None`` for no penalty.

    Returns:
        The canonical ``Penalty`` member.

    Raises:
        InvalidConfigurationError: If the value is not a recognized penalty.
    """
    if isinstance(value, Penalty):
        return value
    if value is None:
        return Penalty.NONE
    if isinstance(value, str):
        key = value.strip().lower()
        if key in PENALTY_ALIASES:
            return PENALTY_ALIASES[key]
    raise InvalidConfigurationError(
        f'Unknown penalty: {value!r}. Valid penalties: {[p.value for p in Penalty]}'
    )
