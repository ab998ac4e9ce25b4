"""Advisory notes shown next to a classified result."""

SPECIFIC_NOTES = {
    "RDWCV": {
        "High": "High RDW may indicate mixed anemia; check MCV and MCH.",
        "Borderline High": "RDW near upper limit; review with MCV/MCH.",
    },
    "RDWSD": {
        "High": "High RDW-SD may suggest anisocytosis; correlate clinically.",
        "Borderline High": "RDW-SD near upper limit; correlate with RDW-CV.",
    },
    "WBC": {
        "High": "High WBC may indicate infection/inflammation; evaluate clinically.",
        "Low": "Low WBC; repeat and review medications/symptoms if persistent.",
    },
    "RBC": {
        "Low": "Low RBC; consider iron/B12 workup if symptoms are present.",
        "Borderline Low": "RBC near lower limit; monitor and correlate with HGB/HCT.",
    },
    "A1C": {
        "High": "A1C is high; discuss the plan with your doctor and repeat in ~3 months.",
        "Borderline High": "A1C near upper limit; lifestyle review and follow-up.",
    },
}

GENERIC_NOTES = {
    "High": "The result is above the normal range; follow up with your doctor.",
    "Borderline High": "The result is close to the upper limit; consider retesting and monitoring.",
    "Low": "The result is below the normal range; follow up with your doctor.",
    "Borderline Low": "The result is close to the lower limit; monitor symptoms and retest.",
    "Unknown": "No reference range is currently available for this test.",
}
