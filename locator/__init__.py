"""
# locator is a Python project for working with relative references: the path,
# query, and fragment of a Resource Indicator without its scheme or authority.
# It is intended to be a dependency of frameworks or servers that need to build
# or rewrite request targets.

# [ References ]
# &.reference.Reference is the value type. It is constructed from a
# path-query-fragment string, resolved against other references with
# &.reference.Reference.join, and edited in place with its path and query views.

# [ Resource Indicators ]
# &.ri provides the splitting, percent-encoding, and RFC 3986 resolution
# procedures that references are built upon.
"""
