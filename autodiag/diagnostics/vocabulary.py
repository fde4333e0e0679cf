# autodiag/diagnostics/vocabulary.py

# Canonical symptom phrases looked for verbatim in the user's description
COMMON_SYMPTOMS = [
    "rough idle",
    "poor acceleration",
    "engine misfire",
    "check engine light",
    "grinding noise",
    "squealing",
    "vibration",
    "overheating",
    "stalling",
    "hard starting",
    "poor fuel economy",
    "smoke",
    "leaking",
    "burning smell",
    "whining noise",
    "clicking",
    "hesitation",
    "loss of power",
    "jerking",
]

STOP_WORDS = {
    "when",
    "that",
    "this",
    "with",
    "from",
    "have",
    "been",
    "will",
    "would",
}

# Words of this length or shorter never become keywords
MIN_KEYWORD_LENGTH = 3


# --------------------------------------------------
# Diagnostic steps
# --------------------------------------------------

INITIAL_STEPS = [
    "Perform initial visual inspection of engine bay and undercarriage",
    "Connect OBD-II scanner to retrieve diagnostic trouble codes",
    "Check all fluid levels and condition",
]

CATEGORY_STEP_TEMPLATES = {
    "engine": "Test {name} operation and electrical connections",
    "brakes": "Inspect {name} for wear and proper operation",
    "electrical": "Test {name} voltage and amperage output",
}
DEFAULT_STEP_TEMPLATE = "Inspect and test {name} functionality"

CLOSING_STEP = "Verify repair by test driving and re-scanning for codes"


# --------------------------------------------------
# Preventive measures
# --------------------------------------------------

CATEGORY_PREVENTIVE_MEASURES = {
    "engine": [
        "Follow regular oil change intervals",
        "Use quality fuel and fuel additives",
        "Replace air filter regularly",
    ],
    "brakes": [
        "Avoid aggressive braking when possible",
        "Have brakes inspected every 12,000 miles",
    ],
    "cooling": [
        "Flush cooling system per manufacturer schedule",
        "Check coolant levels monthly",
    ],
    "electrical": [
        "Keep battery terminals clean and tight",
        "Test charging system annually",
    ],
}

GENERAL_PREVENTIVE_MEASURES = [
    "Follow manufacturer maintenance schedule",
    "Address warning lights promptly",
]


# --------------------------------------------------
# Repair time buckets: (max total labor hours, label)
# --------------------------------------------------

REPAIR_TIME_BUCKETS = [
    (2, "1-2 hours"),
    (4, "2-4 hours"),
    (8, "4-8 hours (same day)"),
]
LONG_REPAIR_TIME = "1-2 days"


RECOMMENDED_SHOPS = [
    "Certified ASE Mechanics",
    "Dealership Service Centers",
    "Specialized Auto Repair Shops",
]

PARTS_SOURCES = [
    {
        "source": "Dealership Parts Department",
        "type": "OEM",
        "price_range": "Highest quality, premium pricing",
        "availability": "1-3 business days",
    },
    {
        "source": "AutoZone / O'Reilly Auto Parts",
        "type": "Aftermarket",
        "price_range": "Mid-range pricing, good quality",
        "availability": "Same day / Next day",
    },
    {
        "source": "RockAuto.com",
        "type": "Aftermarket",
        "price_range": "Competitive pricing, wide selection",
        "availability": "2-5 business days",
    },
    {
        "source": "Amazon Automotive",
        "type": "Aftermarket",
        "price_range": "Variable pricing, fast shipping",
        "availability": "1-2 business days",
    },
]
