"""Monetary domain package.

This package contains classes for handling monetary amounts and currencies,
including Currency definitions, rounding policies and the immutable Money
value type with exact decimal arithmetic.
"""
