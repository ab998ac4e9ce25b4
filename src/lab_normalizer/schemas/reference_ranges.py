from lab_normalizer.schemas.lab_report import ReferenceRange


# Simple adult reference intervals, keyed by canonical key.
REFERENCE_RANGES = {
    # CBC - Complete Blood Count
    "HGB": ReferenceRange(low=12.0, high=17.5, unit="g/dL"),
    "HCT": ReferenceRange(low=36.0, high=50.0, unit="%"),
    "RBC": ReferenceRange(low=4.2, high=6.1, unit="x10^12/L"),
    "WBC": ReferenceRange(low=4.0, high=11.0, unit="x10^9/L"),
    "MCV": ReferenceRange(low=80.0, high=100.0, unit="fL"),
    "MCH": ReferenceRange(low=27.0, high=33.0, unit="pg"),
    "MCHC": ReferenceRange(low=32.0, high=36.0, unit="g/dL"),
    "RDWCV": ReferenceRange(low=11.0, high=16.0, unit="%"),
    "RDWSD": ReferenceRange(low=35.0, high=56.0, unit="fL"),
    "PLT": ReferenceRange(low=150.0, high=450.0, unit="x10^9/L"),
    "MPV": ReferenceRange(low=6.5, high=12.0, unit="fL"),
    "PDW": ReferenceRange(low=25.0, high=65.0, unit="%"),
    "PCT": ReferenceRange(low=0.108, high=0.282, unit="%"),
    # Differential - percentages
    "NEUTROPHILS": ReferenceRange(low=38.0, high=70.0, unit="%"),
    "LYMPHOCYTES": ReferenceRange(low=20.0, high=45.0, unit="%"),
    "MONOCYTES": ReferenceRange(low=2.0, high=8.0, unit="%"),
    "EOSINOPHILS": ReferenceRange(low=1.0, high=4.0, unit="%"),
    "BASOPHILS": ReferenceRange(low=0.0, high=1.0, unit="%"),
    # Differential - absolute counts
    "NEUTROPHILSABS": ReferenceRange(low=1.5, high=7.0, unit="x10^9/L"),
    "LYMPHOCYTESABS": ReferenceRange(low=1.0, high=3.0, unit="x10^9/L"),
    "MONOCYTESABS": ReferenceRange(low=0.2, high=0.8, unit="x10^9/L"),
    "EOSINOPHILSABS": ReferenceRange(low=0.0, high=0.5, unit="x10^9/L"),
    "BASOPHILSABS": ReferenceRange(low=0.0, high=0.1, unit="x10^9/L"),
    # Metabolic / others
    "A1C": ReferenceRange(low=4.0, high=5.6, unit="%"),
    "GLUCOSE": ReferenceRange(low=70.0, high=99.0, unit="mg/dL"),
    "TSH": ReferenceRange(low=0.4, high=4.0, unit="mIU/L"),
    "CREATININE": ReferenceRange(low=0.59, high=1.35, unit="mg/dL"),
    "CRP": ReferenceRange(low=0.0, high=10.0, unit="mg/L"),
    "HDL": ReferenceRange(low=40.0, high=59.0, unit="mg/dL"),
    "LDL": ReferenceRange(low=0.0, high=129.0, unit="mg/dL"),
}
