"""Configuration for the part cross-reference MCP server."""

import os

# Server settings
HTTP_PORT = int(os.getenv("HTTP_PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Request guards for tool inputs
MAX_CANDIDATES = int(os.getenv("MAX_CANDIDATES", "200"))
MAX_TEXT_LENGTH = 500

# Scoring credits (fraction of rule weight earned)
REVIEW_CREDIT = 0.5  # application_review and any other review outcome
OPERATIONAL_MISMATCH_CREDIT = 0.8  # operational rule, values differ

# Feedback reference voltage check (switching / linear regulators)
VREF_MATCH_TOLERANCE_PCT = 1.0  # Vref within ±1% needs no divider change
VREF_OUTPUT_TOLERANCE_PCT = 2.0  # implied Vout within ±2% of the design value
VREF_OUTPUT_ATTRIBUTE = "output_voltage"

# Reverse recovery time thresholds for rectifier enrichment (seconds)
ULTRAFAST_TRR_MAX_S = 100e-9  # trr < 100ns -> Ultrafast
FAST_TRR_MAX_S = 500e-9  # 100ns <= trr < 500ns -> Fast, else Standard

# Placeholders for missing descriptive fields
UNKNOWN_MANUFACTURER = "Unknown"
MISSING_VALUE = "N/A"

# Number of unique rule notes copied into a recommendation summary
MAX_SUMMARY_NOTES = 2
