"""
Test suite for tanum

Contains:
- tests/unit/          : Unit tests for the numeric kernel (Num contract,
                         DoubleNum, DecimalNum, NaN, algorithms, contracts)
"""
