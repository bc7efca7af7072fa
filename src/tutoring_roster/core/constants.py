"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

CONTEXTS = ("Login", "Meta", "Med", "IRE", "Ed-tech")

LOW_BALANCE_THRESHOLD_HOURS = 5

# Ledger arithmetic is rounded to this many decimal places
HOURS_DECIMALS = 6
