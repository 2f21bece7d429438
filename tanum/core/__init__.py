"""
Core numeric kernel: Num contract, its representations and invariants.

This module contains the foundational building blocks that every indicator,
rule and criterion of the toolkit computes with. It has no dependencies on
bar series, strategies or any I/O.
"""

import logging

logging.getLogger("tanum").addHandler(logging.NullHandler())
