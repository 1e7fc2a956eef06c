"""Performance benchmarks for gradopt.

This package contains microbenchmarks for the descent drivers and line
searches on convex quadratics of increasing size.
"""
