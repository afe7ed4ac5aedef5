"""
Rule-based red flag detection.

Each rule examines one statement ratio and returns a pass/warning/fail
flag with a message embedding the computed figures.
"""

from moneytalks.rules.red_flags import default_rules
from moneytalks.rules.red_flags import detect_red_flags
from moneytalks.rules.red_flags import InventoryBloat
from moneytalks.rules.red_flags import MarginCompression
from moneytalks.rules.red_flags import RedFlagRule
from moneytalks.rules.red_flags import SBCDilution
from moneytalks.rules.red_flags import summarize_red_flags

__all__ = [
    'RedFlagRule', 'InventoryBloat', 'SBCDilution', 'MarginCompression',
    'default_rules', 'detect_red_flags', 'summarize_red_flags',
]
