"""Core (UI-agnostic) sleep dashboard logic.

This package contains:
- data loading (CSV -> pandas -> typed records)
- record filtering and category grouping
- descriptive statistics (mean, std, quantiles, box fences, regression)
- per-chart compute functions (JSON-serializable payloads)
"""
