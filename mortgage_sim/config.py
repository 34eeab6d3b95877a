"""Settings shared by the engine and the host layers.

Constants that shape the schedule live here alongside a few
environment-driven settings used by the command-line and web hosts. Values
read from the environment fall back to sensible local defaults.
"""

from __future__ import annotations

import os

# Months of slack allowed past the contractual term before the simulation
# loop gives up on a loan that never amortizes.
SAFETY_MONTHS_SLACK = 600

# The only repayment mode: extra payments shorten the loan, the scheduled
# installment stays the same until the rate switch re-amortizes it.
KEEP_PAYMENT = "keep_payment"

# Longest contractual term accepted from user input (100 years).
MAX_TERM_MONTHS = 1200

# Number of schedule rows shown before the output is truncated.
SCHEDULE_PREVIEW_ROWS = int(os.environ.get("MORTGAGE_SIM_PREVIEW_ROWS", "120"))

LOG_LEVEL = os.environ.get("MORTGAGE_SIM_LOG_LEVEL", "WARNING").upper()

WEB_HOST = os.environ.get("MORTGAGE_SIM_HOST", "0.0.0.0")
WEB_PORT = int(os.environ.get("MORTGAGE_SIM_PORT", "8710"))
