"""
oppack - Operator package compiler

Turns operator packages (operator.yaml, params.yaml, templates/) into the
Operator, OperatorVersion and Instance objects a cluster installs, and picks
the relevant plan out of an instance's plan status.
"""

__version__ = "0.1.0"


__all__ = ["OppackConfig", "load_config", "get_oppack_home"]

from .config import OppackConfig, load_config, get_oppack_home
