"""
Series parsing and alignment module.

Handles conversion of raw chart payloads into ordered samples, inner-join
alignment of the primary and secondary series, and the data models that
flow through a query.
"""
