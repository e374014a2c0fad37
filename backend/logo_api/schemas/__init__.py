# Schemas package init
"""
Typed values at both edges of the read path: projected database rows
(`rows`) and the JSON envelopes returned to clients (`envelope`).
"""
