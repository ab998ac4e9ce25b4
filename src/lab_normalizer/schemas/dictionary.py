"""Canonical test vocabulary and the alias table that feeds into it.

Canonical keys are uppercase and alphanumeric only. Declaration order is
significant: it breaks ties between equally long keys during substring
matching.
"""

TEST_NAMES = {
    # CBC core
    "HGB": "Hemoglobin",
    "HCT": "Hematocrit (aka PCV)",
    "RBC": "Red Blood Cell count",
    "WBC": "White Blood Cell count",
    "MCV": "Mean Corpuscular Volume",
    "MCH": "Mean Corpuscular Hemoglobin",
    "MCHC": "Mean Corpuscular Hemoglobin Concentration",
    "RDWCV": "Red Cell Distribution Width (CV)",
    "RDWSD": "Red Cell Distribution Width (SD)",
    "PLT": "Platelet count",
    "MPV": "Mean Platelet Volume",
    "PDW": "Platelet Distribution Width",
    "PCT": "Plateletcrit",
    # Differential WBC, percentages
    "NEUTROPHILS": "Neutrophils (%)",
    "LYMPHOCYTES": "Lymphocytes (%)",
    "MONOCYTES": "Monocytes (%)",
    "EOSINOPHILS": "Eosinophils (%)",
    "BASOPHILS": "Basophils (%)",
    # Differential WBC, absolute counts
    "NEUTROPHILSABS": "Neutrophils (Abs)",
    "LYMPHOCYTESABS": "Lymphocytes (Abs)",
    "MONOCYTESABS": "Monocytes (Abs)",
    "EOSINOPHILSABS": "Eosinophils (Abs)",
    "BASOPHILSABS": "Basophils (Abs)",
    # Metabolic and others
    "A1C": "HbA1c (3-month average glucose)",
    "GLUCOSE": "Glucose (fasting)",
    "TSH": "Thyroid Stimulating Hormone",
    "CREATININE": "Serum Creatinine",
    "CRP": "C-Reactive Protein",
    "HDL": "HDL Cholesterol",
    "LDL": "LDL Cholesterol",
}

TEST_ALIASES = {
    # Hemoglobin
    "HB": "HGB",
    "HEMOGLOBIN": "HGB",
    "HAEMOGLOBIN": "HGB",
    "HEMOGLOBINHB": "HGB",
    "HGBH": "HGB",
    # Hematocrit
    "HEMATOCRIT": "HCT",
    "HAEMATOCRIT": "HCT",
    "PCV": "HCT",
    "PACKEDCELLVOLUME": "HCT",
    # RBC
    "RBCCOUNT": "RBC",
    "TOTALRBC": "RBC",
    "RBCC": "RBC",
    "REDBLOODCELLS": "RBC",
    "REDCELLCOUNT": "RBC",
    # WBC, including verbose lab phrasing
    "WBCCOUNT": "WBC",
    "TOTALWBC": "WBC",
    "TOTALCOUNTWBC": "WBC",
    "TOTALCOUNTWBCEDTABLOOD": "WBC",
    "TOTALCOUNT": "WBC",
    "TLC": "WBC",
    "WHITEBLOODCELLS": "WBC",
    "TOTALLEUCOCYTECOUNT": "WBC",
    # Red cell indices
    "MEANCORPUSCULARVOLUME": "MCV",
    "MEANCORPUSCULARHEMOGLOBIN": "MCH",
    "MEANCORPUSCULARHEMOGLOBINCONCENTRATION": "MCHC",
    # RDW
    "RDW": "RDWCV",
    "RDWCVPERCENT": "RDWCV",
    "RDWSDFL": "RDWSD",
    # Platelets
    "PLATELETCOUNT": "PLT",
    "PLATELETS": "PLT",
    "PLATELET": "PLT",
    "PLTCOUNT": "PLT",
    "MEANPLATELETVOLUME": "MPV",
    "PLATELETCRIT": "PCT",
    # Differential percentages
    "NEUT": "NEUTROPHILS",
    "NEUTROPHIL": "NEUTROPHILS",
    "SEGMENTEDNEUTROPHILS": "NEUTROPHILS",
    "LYMPH": "LYMPHOCYTES",
    "LYMPHOCYTE": "LYMPHOCYTES",
    "MONO": "MONOCYTES",
    "MONOCYTE": "MONOCYTES",
    "EOS": "EOSINOPHILS",
    "EOSINOPHIL": "EOSINOPHILS",
    "BASO": "BASOPHILS",
    "BASOPHIL": "BASOPHILS",
    # Differential absolute counts
    "NEUTROPHILSABSOLUTE": "NEUTROPHILSABS",
    "NEUTABS": "NEUTROPHILSABS",
    "ABSNEUTROPHILS": "NEUTROPHILSABS",
    "LYMPHOCYTESABSOLUTE": "LYMPHOCYTESABS",
    "LYMPHABS": "LYMPHOCYTESABS",
    "ABSLYMPHOCYTES": "LYMPHOCYTESABS",
    "MONOCYTESABSOLUTE": "MONOCYTESABS",
    "MONOABS": "MONOCYTESABS",
    "ABSMONOCYTES": "MONOCYTESABS",
    "EOSINOPHILSABSOLUTE": "EOSINOPHILSABS",
    "EOSABS": "EOSINOPHILSABS",
    "ABSEOSINOPHILS": "EOSINOPHILSABS",
    "BASOPHILSABSOLUTE": "BASOPHILSABS",
    "BASOABS": "BASOPHILSABS",
    "ABSBASOPHILS": "BASOPHILSABS",
    # Singular cell names followed by ABS
    "NEUTROPHILABS": "NEUTROPHILSABS",
    "LYMPHOCYTEABS": "LYMPHOCYTESABS",
    "MONOCYTEABS": "MONOCYTESABS",
    "EOSINOPHILABS": "EOSINOPHILSABS",
    "BASOPHILABS": "BASOPHILSABS",
    # Metabolic
    "HBA1C": "A1C",
    "HEMOGLOBINA1C": "A1C",
    "GLYCATEDHEMOGLOBIN": "A1C",
    "GLYCOHEMOGLOBIN": "A1C",
    "FBS": "GLUCOSE",
    "FASTINGGLUCOSE": "GLUCOSE",
    "BLOODSUGAR": "GLUCOSE",
    "CREAT": "CREATININE",
    "SERUMCREATININE": "CREATININE",
    "CREACTIVEPROTEIN": "CRP",
    "HDLC": "HDL",
    "HDLCHOLESTEROL": "HDL",
    "LDLC": "LDL",
    "LDLCHOLESTEROL": "LDL",
    "THYROTROPIN": "TSH",
}
