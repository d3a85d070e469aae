"""
Utility functions module.

Calendar arithmetic, timestamp conversion and display window helpers
shared by the parsing, return and query stages.

Time Semantics:
- Upstream timestamps are unix seconds, mapped to UTC calendar dates
- Month and year offsets keep the day of month, overflowing into the next month
- Fetch ranges never extend past the present moment
"""
