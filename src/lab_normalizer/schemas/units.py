"""Unit tables: display units per canonical key and raw-unit spellings."""

# Display unit per canonical key, grouped by family.
UNIT_FAMILIES = {
    # Percentage-type tests
    "%": ("HCT", "RDWCV", "PCT", "PDW", "NEUTROPHILS", "LYMPHOCYTES",
          "MONOCYTES", "EOSINOPHILS", "BASOPHILS", "A1C"),
    # Mass concentration
    "g/dL": ("HGB", "MCHC"),
    # Cell indices
    "fL": ("MCV", "RDWSD", "MPV"),
    "pg": ("MCH",),
    # Counts
    "x10^9/L": ("WBC", "PLT"),
    "x10^12/L": ("RBC",),
    # Metabolic panel
    "mg/dL": ("GLUCOSE", "CREATININE", "HDL", "LDL"),
    "mIU/L": ("TSH",),
    "mg/L": ("CRP",),
}

DISPLAY_UNITS = {key: unit for unit, keys in UNIT_FAMILIES.items() for key in keys}

# Suffix rules for keys without an explicit display unit.
UNIT_SUFFIX_RULES = (
    ("ABS", "x10^9/L"),
)

# Raw unit spellings (uppercased, stripped to A-Z 0-9 ^ / %) -> canonical unit.
RAW_UNIT_MAP = {
    "%": "%",
    "PERCENT": "%",
    "G/DL": "g/dL",
    "GDL": "g/dL",
    "GPERDL": "g/dL",
    "GPDL": "g/dL",
    "G/L": "g/L",
    "FL": "fL",
    "PG": "pg",
    # Counts
    "X10^9/L": "x10^9/L",
    "10^9/L": "x10^9/L",
    "X10^3/UL": "x10^9/L",  # Same scale as 10^9/L
    "10^3/UL": "x10^9/L",
    "K/UL": "x10^9/L",
    "X10^12/L": "x10^12/L",
    "10^12/L": "x10^12/L",
    "MILLION/CMM": "x10^12/L",  # Same scale as 10^12/L
    "M/UL": "x10^12/L",
    "X10^6/UL": "x10^12/L",
    # Chemistry
    "MG/DL": "mg/dL",
    "MG/L": "mg/L",
    "MMOL/L": "mmol/L",
    "UMOL/L": "umol/L",
    "MIU/L": "mIU/L",
    "UIU/ML": "mIU/L",  # Same scale as mIU/L
}

# (canonical key, given canonical unit) -> factor into the display unit.
CONVERSION_FACTORS = {
    ("GLUCOSE", "mmol/L"): 18.016,
    ("CREATININE", "umol/L"): 1 / 88.4,
    ("HDL", "mmol/L"): 38.67,
    ("LDL", "mmol/L"): 38.67,
    ("HGB", "g/L"): 0.1,
    ("MCHC", "g/L"): 0.1,
}
