"""Rates, thresholds and lookup tables for payout calculations.

All values are static configuration for the Indian tax rules the platform
operates under. Percentages are stored as whole numbers (18 means 18%).
"""

import re

# Platform commission, as percentage of contract value
PLATFORM_FEES = {
    "client_percentage": 3,
    "freelancer_percentage": 5,
}

# GST on service (if freelancer is GST registered) and on platform fee
# TDS is Section 194J professional services
TAX_RATES = {
    "gst": 18,
    "tds": 10,
    "tcs": 1,
}

# Income Tax Act thresholds in INR (per client-freelancer pair)
TDS_THRESHOLD = {
    "single_payment": 30000,
    "cumulative_per_fy": 30000,
}

# TDS held in FD matures this long after the quarter end
FD_MATURITY = {
    "quarter_end_days": 30,
    "buffer_working_days": 5,
}

# Bids below this percentage of the project budget are rejected
MIN_BID_PERCENTAGE = 80

# 5 letters, 4 digits, 1 letter (e.g., ABCDE1234F)
PAN_PATTERN = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]{1}$")

# 2 digit state code, 10 char PAN, entity number, Z, checksum
GSTIN_PATTERN = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z]{1}[1-9A-Z]{1}Z[0-9A-Z]{1}$")

# Position (0-based) of the holder type code described for a PAN (4th character)
PAN_HOLDER_TYPE_INDEX = 3

# Position (0-based) of the character validate_pan checks against PAN_HOLDER_TYPES.
# Real PANs whose 5th character is outside the table (e.g. AAAPS1234A) fail validation.
PAN_VALIDATION_TYPE_INDEX = 4

PAN_HOLDER_TYPES = {
    "A": "Association of Persons (AOP)",
    "B": "Body of Individuals (BOI)",
    "C": "Company",
    "E": "Limited Liability Partnership (LLP)",
    "F": "Firm/LLP",
    "G": "Government",
    "H": "HUF (Hindu Undivided Family)",
    "L": "Local Authority",
    "J": "Artificial Juridical Person",
    "P": "Individual/Person",
    "T": "Trust (AOP)",
    "K": "Krishi Unnat Samaj",
}

GSTIN_STATE_CODES = {
    "01": "Jammu & Kashmir",
    "02": "Himachal Pradesh",
    "03": "Punjab",
    "04": "Chandigarh",
    "05": "Uttarakhand",
    "06": "Haryana",
    "07": "Delhi",
    "08": "Rajasthan",
    "09": "Uttar Pradesh",
    "10": "Bihar",
    "11": "Sikkim",
    "12": "Arunachal Pradesh",
    "13": "Nagaland",
    "14": "Manipur",
    "15": "Mizoram",
    "16": "Tripura",
    "17": "Meghalaya",
    "18": "Assam",
    "19": "West Bengal",
    "20": "Jharkhand",
    "21": "Odisha",
    "22": "Chhattisgarh",
    "23": "Madhya Pradesh",
    "24": "Gujarat",
    "25": "Daman & Diu",
    "26": "Dadra & Nagar Haveli",
    "27": "Maharashtra",
    "28": "Andhra Pradesh (Old)",
    "29": "Karnataka",
    "30": "Goa",
    "31": "Lakshadweep",
    "32": "Kerala",
    "33": "Tamil Nadu",
    "34": "Puducherry",
    "35": "Andaman & Nicobar Islands",
    "36": "Telangana",
    "37": "Andhra Pradesh (New)",
    "97": "Other Territory",
}


def rate(percentage: float) -> float:
    """Convert a whole-number percentage to a decimal multiplier."""
    return percentage / 100
