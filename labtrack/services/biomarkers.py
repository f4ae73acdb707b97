"""Default biomarker catalogue with optimal ranges by sex."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

Benchmark = Dict[str, Any]

# Core biomarkers shown in every analysis report. Ranges may carry a second
# unit in parentheses, e.g. "40-50 g/L (4.0-5.0 g/dL)".
DEFAULT_BENCHMARKS: List[Benchmark] = [
    {
        "name": "ALP",
        "male_range": "65-100 IU/L",
        "female_range": "65-100 IU/L",
        "units": ["IU/L", "U/L"],
        "category": "Liver Function",
        "aliases": ["Alkaline Phosphatase", "Alk Phos", "ALKP"],
    },
    {
        "name": "ALT",
        "male_range": "13-23 IU/L",
        "female_range": "9-19 IU/L",
        "units": ["IU/L", "U/L"],
        "category": "Liver Function",
        "aliases": ["Alanine Aminotransferase", "SGPT", "ALT/SGPT"],
    },
    {
        "name": "AST",
        "male_range": "15-25 IU/L",
        "female_range": "12-22 IU/L",
        "units": ["IU/L", "U/L"],
        "category": "Liver Function",
        "aliases": ["Aspartate Aminotransferase", "SGOT", "AST/SGOT"],
    },
    {
        "name": "Albumin",
        "male_range": "40-50 g/L (4.0-5.0 g/dL)",
        "female_range": "40-50 g/L (4.0-5.0 g/dL)",
        "units": ["g/L", "g/dL"],
        "category": "Protein",
        "aliases": ["Serum Albumin", "ALB", "S-Albumin", "Albumina"],
    },
    {
        "name": "BUN",
        "male_range": "4.0-6.9 mmol/L (11.2-19.3 mg/dL)",
        "female_range": "4.0-6.9 mmol/L (11.2-19.3 mg/dL)",
        "units": ["mmol/L", "mg/dL"],
        "category": "Kidney Function",
        "aliases": ["Blood Urea Nitrogen", "Urea Nitrogen", "Urea"],
    },
    {
        "name": "Basophils",
        "male_range": "≤ 0.09 ×10³/µL",
        "female_range": "≤ 0.09 ×10³/µL",
        "units": ["×10³/µL", "×10^3/µL", "K/µL", "K/uL"],
        "category": "White Blood Cells",
        "aliases": [
            "Baso", "Basophil Count", "Absolute Basophils", "Basos", "Basophil Absolute",
            "Abs Basophils",
        ],
    },
    {
        "name": "Bicarbonate",
        "male_range": "25-30 mmol/L",
        "female_range": "25-30 mmol/L",
        "units": ["mmol/L", "mEq/L"],
        "category": "Electrolytes",
        "aliases": ["Carbon Dioxide", "CO2", "Total CO2", "HCO3", "Bicarb"],
    },
    {
        "name": "Calcium",
        "male_range": "2.3-2.45 mmol/L (9.22-9.8 mg/dL)",
        "female_range": "2.3-2.45 mmol/L (9.22-9.8 mg/dL)",
        "units": ["mmol/L", "mg/dL"],
        "category": "Minerals",
        "aliases": [
            "Serum Calcium", "Total Calcium", "Ca", "Calcium Total", "S-Calcium", "Calcio",
        ],
    },
    {
        "name": "Chloride",
        "male_range": "100-105 mmol/L",
        "female_range": "100-105 mmol/L",
        "units": ["mmol/L", "mEq/L"],
        "category": "Electrolytes",
        "aliases": ["Cl", "Serum Chloride"],
    },
    {
        "name": "Creatinine",
        "male_range": "60-100 µmol/L (0.68-1.13 mg/dL)",
        "female_range": "60-100 µmol/L (0.68-1.13 mg/dL)",
        "units": ["µmol/L", "umol/L", "mg/dL"],
        "category": "Kidney Function",
        "aliases": [
            "Creat", "CREA", "Cre", "CR", "Serum Creatinine", "Creatinine Serum",
            "S-Creatinine", "Blood Creatinine", "Creatinine Level", "Creatinina",
            "Creatinina Sérica", "Créatinine", "Créatinine Sérique", "Kreatinin",
            "Serum-Kreatinin", "Creatinina Sierica",
        ],
    },
    {
        "name": "Eosinophils",
        "male_range": "0.0-0.3 ×10³/µL",
        "female_range": "0.0-0.3 ×10³/µL",
        "units": ["×10³/µL", "×10^3/µL", "K/µL", "K/uL"],
        "category": "White Blood Cells",
        "aliases": [
            "Eos", "Eosinophil Count", "Absolute Eosinophils", "Eosin",
            "Eosinophil Absolute", "Abs Eosinophils",
        ],
    },
    {
        "name": "Fasting Glucose",
        "male_range": "4.44-5.0 mmol/L (80-90 mg/dL)",
        "female_range": "4.44-5.0 mmol/L (80-90 mg/dL)",
        "units": ["mmol/L", "mg/dL"],
        "category": "Metabolic",
        "aliases": [
            "Glucose", "Gluc", "GLU", "Glu", "Glucose Fasting", "Glucose (Fasting)",
            "Glucose, Fasting", "FBG", "FBS", "Fasting Blood Glucose",
            "Fasting Blood Sugar", "Blood Glucose", "Blood Sugar", "Blood Glucose Level",
            "Blood Sugar Level", "Serum Glucose", "Plasma Glucose", "Glucose Serum",
            "Glucose Plasma", "Glucose Level", "Sugar Level", "Glucosa",
            "Glucosa en Ayunas", "Glucosa Sanguínea", "Azúcar en Sangre", "Glicemia",
            "Glicose", "Glicose em Jejum", "Glicose Sanguínea", "Glycémie",
            "Glycémie à Jeun", "Glucose à Jeun", "Glukose", "Nüchtern-Glukose",
            "Blutzucker", "Glucosio", "Glucosio a Digiuno",
        ],
    },
    {
        "name": "Fasting Insulin",
        "male_range": "13-40 pmol/L (2-6 µIU/mL/mU/L/mIU/L)",
        "female_range": "13-40 pmol/L (2-6 µIU/mL/mU/L/mIU/L)",
        "units": ["pmol/L", "µIU/mL", "uIU/mL", "mIU/L", "mU/L"],
        "category": "Metabolic",
        "aliases": ["Insulin", "Insulin Fasting", "Serum Insulin"],
    },
    {
        "name": "Ferritin",
        "male_range": "50-150 µg/L",
        "female_range": "50-150 µg/L",
        "units": ["µg/L", "ug/L", "ng/mL"],
        "category": "Iron Studies",
        "aliases": [
            "Ferr", "FER", "Serum Ferritin", "Ferritin Serum", "S-Ferritin",
            "Ferritin Level", "Ferritina", "Ferritina Sérica", "Ferritine",
            "Ferritine Sérique", "Serum-Ferritin", "Ferritina Sierica",
        ],
    },
    {
        "name": "Free T3",
        "male_range": "3.0-4.5 pg/mL (4.6-6.9 pmol/L)",
        "female_range": "3.0-4.5 pg/mL (4.6-6.9 pmol/L)",
        "units": ["pg/mL", "pmol/L"],
        "category": "Thyroid",
        "aliases": [
            "FT3", "F T3", "F.T.3", "fT3", "T3 Free", "T3, Free", "Free T 3",
            "Free Triiodothyronine", "Triiodothyronine Free", "Triiodothyronine, Free",
            "Free Tri-iodothyronine", "T3 Libre", "Triyodotironina Libre", "T3 Livre",
            "Triiodotironina Livre", "Triiodothyronine Libre", "Freies T3",
            "Freies Triiodthyronin", "T3 Libero", "Triiodotironina Libera",
        ],
    },
    {
        "name": "Free T4",
        "male_range": "1.0-1.55 ng/dL (13-20 pmol/L)",
        "female_range": "1.0-1.55 ng/dL (13-20 pmol/L)",
        "units": ["ng/dL", "pmol/L"],
        "category": "Thyroid",
        "aliases": [
            "FT4", "F T4", "F.T.4", "fT4", "T4 Free", "T4, Free", "Free T 4",
            "Free Thyroxine", "Thyroxine Free", "Thyroxine, Free",
            "Free Tetraiodothyronine", "T4 Libre", "Tiroxina Libre", "T4 Livre",
            "Tiroxina Livre", "Thyroxine Libre", "Freies T4", "Freies Thyroxin",
            "T4 Libero", "Tiroxina Libera",
        ],
    },
    {
        "name": "GGT",
        "male_range": "12-24 IU/L",
        "female_range": "12-24 IU/L",
        "units": ["IU/L", "U/L"],
        "category": "Liver Function",
        "aliases": [
            "Gamma-Glutamyl Transferase", "Gamma GT", "Gamma Glutamyl Transpeptidase",
            "GGTP",
        ],
    },
    {
        "name": "Globulin",
        "male_range": "22-28 g/L (2.2-2.8 g/dL)",
        "female_range": "22-28 g/L (2.2-2.8 g/dL)",
        "units": ["g/L", "g/dL"],
        "category": "Protein",
        "aliases": [
            "Serum Globulin", "Calculated Globulin", "Total Globulin", "Glob", "Globulina",
        ],
    },
    {
        "name": "HbA1C",
        "male_range": "5.0-5.3 % (31-34 mmol/mol)",
        "female_range": "5.0-5.3 % (31-34 mmol/mol)",
        "units": ["%", "mmol/mol"],
        "category": "Metabolic",
        "aliases": [
            "HbA1c", "Hb A1C", "Hb A1c", "HBA1C", "HBA1c", "A1C", "A1c", "Hemoglobin A1C",
            "Hemoglobin A1c", "Glycated Hemoglobin", "Glycosylated Hemoglobin",
            "Glycohemoglobin", "Haemoglobin A1C", "Haemoglobin A1c", "Hgb A1C", "Hgb A1c",
            "HGB A1C", "Glycated Hb", "Glycated HGB", "GHb", "Hemoglobina Glicosilada",
            "Hemoglobina Glicada", "Hémoglobine Glyquée", "Glykiertes Hämoglobin",
            "Emoglobina Glicata",
        ],
    },
    {
        "name": "HCT",
        "male_range": "38-48 %",
        "female_range": "38-48 %",
        "units": ["%", "L/L"],
        "category": "Red Blood Cells",
        "aliases": ["Hematocrit", "Hct", "Haematocrit", "Hematocrit Level"],
    },
    {
        "name": "HDL Cholesterol",
        "male_range": "1.29-2.2 mmol/L (50-85 mg/dL)",
        "female_range": "1.29-2.2 mmol/L (50-85 mg/dL)",
        "units": ["mmol/L", "mg/dL"],
        "category": "Lipids",
        "aliases": [
            "HDL", "HDL-C", "HDL C", "HDLC", "HDL-Cholesterol", "Cholesterol HDL",
            "HDL Chol", "HDL-Chol", "Chol HDL", "High Density Lipoprotein",
            "High-Density Lipoprotein", "Colesterol HDL", "HDL Colesterol",
            "HDL-Colesterol", "Cholestérol HDL", "HDL Cholestérol", "HDL Cholesterin",
            "HDL-Cholesterin", "Colesterolo HDL", "HDL Colesterolo",
        ],
    },
    {
        "name": "Hemoglobin",
        "male_range": "145-155 g/L (14.5-15.5 g/dL)",
        "female_range": "135-145 g/L (13.5-14.5 g/dL)",
        "units": ["g/L", "g/dL"],
        "category": "Red Blood Cells",
        "aliases": ["Hgb", "Hb", "Haemoglobin", "HGB", "Hemoglobin Level"],
    },
    {
        "name": "Homocysteine",
        "male_range": "6-10 µmol/L",
        "female_range": "6-10 µmol/L",
        "units": ["µmol/L", "umol/L"],
        "category": "Cardiovascular",
        "aliases": ["Homocystine", "Plasma Homocysteine"],
    },
    {
        "name": "LDH",
        "male_range": "140-200 IU/L",
        "female_range": "140-200 IU/L",
        "units": ["IU/L", "U/L"],
        "category": "Enzymes",
        "aliases": ["Lactate Dehydrogenase", "LD", "LDH Total"],
    },
    {
        "name": "LDL Cholesterol",
        "male_range": "2.07-4.4 mmol/L (80-170 mg/dL)",
        "female_range": "2.07-4.4 mmol/L (80-170 mg/dL)",
        "units": ["mmol/L", "mg/dL"],
        "category": "Lipids",
        "aliases": [
            "LDL", "LDL-C", "LDL C", "LDLC", "LDL-Cholesterol", "Cholesterol LDL",
            "LDL Chol", "LDL-Chol", "Chol LDL", "Low Density Lipoprotein",
            "Low-Density Lipoprotein", "LDL Calculated", "LDL Calc", "Calculated LDL",
            "LDL Direct", "Direct LDL", "Colesterol LDL", "LDL Colesterol",
            "LDL-Colesterol", "Cholestérol LDL", "LDL Cholestérol", "LDL Cholesterin",
            "LDL-Cholesterin", "Colesterolo LDL", "LDL Colesterolo",
        ],
    },
    {
        "name": "Lymphocytes",
        "male_range": "1.1-3.1 ×10³/µL",
        "female_range": "1.1-3.1 ×10³/µL",
        "units": ["×10³/µL", "×10^3/µL", "K/µL", "K/uL"],
        "category": "White Blood Cells",
        "aliases": [
            "Lymph", "Lymphocyte Count", "Absolute Lymphocytes", "Lymphs",
            "Lymphocyte Absolute", "Abs Lymphocytes",
        ],
    },
    {
        "name": "MCH",
        "male_range": "28-32 pg",
        "female_range": "28-32 pg",
        "units": ["pg"],
        "category": "Red Blood Cells",
        "aliases": ["Mean Corpuscular Hemoglobin", "Mean Cell Hemoglobin"],
    },
    {
        "name": "MCHC",
        "male_range": "32-35 g/dL (320-350 g/L)",
        "female_range": "32-35 g/dL (320-350 g/L)",
        "units": ["g/dL", "g/L"],
        "category": "Red Blood Cells",
        "aliases": [
            "Mean Corpuscular Hemoglobin Concentration",
            "Mean Cell Hemoglobin Concentration",
        ],
    },
    {
        "name": "MCV",
        "male_range": "82-89 fL",
        "female_range": "82-89 fL",
        "units": ["fL"],
        "category": "Red Blood Cells",
        "aliases": ["Mean Corpuscular Volume", "Mean Cell Volume"],
    },
    {
        "name": "Monocytes",
        "male_range": "0.3-0.5 ×10³/µL",
        "female_range": "0.3-0.5 ×10³/µL",
        "units": ["×10³/µL", "×10^3/µL", "K/µL", "K/uL"],
        "category": "White Blood Cells",
        "aliases": [
            "Mono", "Monocyte Count", "Absolute Monocytes", "Monos", "Monocyte Absolute",
            "Abs Monocytes",
        ],
    },
    {
        "name": "Neutrophils",
        "male_range": "3.0-4.5 ×10³/µL",
        "female_range": "3.0-4.5 ×10³/µL",
        "units": ["×10³/µL", "×10^3/µL", "K/µL", "K/uL"],
        "category": "White Blood Cells",
        "aliases": [
            "Neut", "Neutrophil Count", "Absolute Neutrophils", "Segmented Neutrophils",
            "Segs", "Polys", "PMN", "Neutrophil Absolute", "Abs Neutrophils",
        ],
    },
    {
        "name": "Phosphorus",
        "male_range": "3.0-4.0 mg/dL (0.97-1.29 mmol/L)",
        "female_range": "3.0-4.0 mg/dL (0.97-1.29 mmol/L)",
        "units": ["mg/dL", "mmol/L"],
        "category": "Minerals",
        "aliases": ["Phosphate", "Inorganic Phosphorus", "Serum Phosphorus", "P"],
    },
    {
        "name": "Platelets",
        "male_range": "200-300 ×10³/µL",
        "female_range": "200-300 ×10³/µL",
        "units": ["×10³/µL", "×10^3/µL", "K/µL", "K/uL"],
        "category": "Blood Cells",
        "aliases": ["PLT", "Platelet Count", "Thrombocytes", "Platelet", "Thrombocyte Count"],
    },
    {
        "name": "Potassium",
        "male_range": "4.0-4.5 mmol/L",
        "female_range": "4.0-4.5 mmol/L",
        "units": ["mmol/L", "mEq/L"],
        "category": "Electrolytes",
        "aliases": ["K", "Serum Potassium", "S-Potassium", "Potasio", "K+"],
    },
    {
        "name": "RBC",
        "male_range": "4.2-4.9 ×10¹²/L",
        "female_range": "3.9-4.5 ×10¹²/L",
        "units": ["×10¹²/L", "×10^12/L", "M/µL", "M/uL"],
        "category": "Red Blood Cells",
        "aliases": [
            "Red Blood Cell Count", "RBC Count", "Erythrocytes", "Red Cell Count",
            "Erythrocyte Count",
        ],
    },
    {
        "name": "RDW",
        "male_range": "< 13 %",
        "female_range": "< 13 %",
        "units": ["%"],
        "category": "Red Blood Cells",
        "aliases": ["Red Cell Distribution Width", "RDW-CV", "RDW-SD"],
    },
    {
        "name": "Serum Folate",
        "male_range": "34-59 nmol/L (15-26 ng/mL)",
        "female_range": "34-59 nmol/L (15-26 ng/mL)",
        "units": ["nmol/L", "ng/mL"],
        "category": "Vitamins",
        "aliases": [
            "Folate", "Folic Acid", "Folate Serum", "Vitamin B9", "Vitamin B-9", "B9",
            "B-9", "Folate Level", "Folic Acid Level", "Folato", "Ácido Fólico",
            "Vitamina B9", "Folato Sérico", "Acide Folique", "Vitamine B9", "Folsäure",
            "Folat", "Acido Folico",
        ],
    },
    {
        "name": "Serum Iron",
        "male_range": "14.3-23.2 µmol/L (80-130 µg/dL)",
        "female_range": "14.3-23.2 µmol/L (80-130 µg/dL)",
        "units": ["µmol/L", "umol/L", "µg/dL", "ug/dL"],
        "category": "Iron Studies",
        "aliases": ["Iron", "Fe", "Iron Total"],
    },
    {
        "name": "Serum Magnesium",
        "male_range": "0.9-1.0 mmol/L (2.19-2.43 mg/dL)",
        "female_range": "0.9-1.0 mmol/L (2.19-2.43 mg/dL)",
        "units": ["mmol/L", "mg/dL"],
        "category": "Minerals",
        "aliases": ["Magnesium", "Mg", "Mag"],
    },
    {
        "name": "SHBG",
        "male_range": "40-50 nmol/L",
        "female_range": "50-80 nmol/L",
        "units": ["nmol/L"],
        "category": "Hormones",
        "aliases": ["Sex Hormone Binding Globulin", "Sex Hormone-Binding Globulin"],
    },
    {
        "name": "Sodium",
        "male_range": "137-143 mmol/L",
        "female_range": "137-143 mmol/L",
        "units": ["mmol/L", "mEq/L"],
        "category": "Electrolytes",
        "aliases": ["Na", "Serum Sodium", "S-Sodium", "Sodio", "Na+"],
    },
    {
        "name": "TIBC",
        "male_range": "44-62 µmol/L (250-350 mg/dL)",
        "female_range": "44-62 µmol/L (250-350 mg/dL)",
        "units": ["µmol/L", "umol/L", "mg/dL", "µg/dL", "ug/dL"],
        "category": "Iron Studies",
        "aliases": ["Total Iron Binding Capacity", "Iron Binding Capacity"],
    },
    {
        "name": "TPO Antibodies",
        "male_range": "Refer to lab specific range",
        "female_range": "Refer to lab specific range",
        "units": ["IU/mL", "U/mL"],
        "category": "Thyroid",
        "aliases": [
            "Thyroid Peroxidase Antibodies", "Anti-TPO", "TPO Ab", "Thyroid Peroxidase Ab",
        ],
    },
    {
        "name": "TSH",
        "male_range": "1.0-2.5 mIU/L/µIU/mL/mU/L",
        "female_range": "1.0-2.5 mIU/L/µIU/mL/mU/L",
        "units": ["mIU/L", "µIU/mL", "uIU/mL", "mU/L"],
        "category": "Thyroid",
        "aliases": [
            "T.S.H.", "T S H", "Thyroid Stimulating Hormone", "Thyroid-Stimulating Hormone",
            "Thyrotropin", "Thyrotropic Hormone", "Serum TSH", "TSH Serum",
            "Hormona Estimulante de Tiroides", "Tirotropina",
            "Hormônio Estimulante da Tireoide", "Tireotropina", "Thyréostimuline",
            "Hormone Thyréotrope", "Thyreoidea-stimulierendes Hormon", "Thyreotropin",
            "Ormone Tireostimolante",
        ],
    },
    {
        "name": "Thyroglobulin Antibodies",
        "male_range": "Refer to lab specific range",
        "female_range": "Refer to lab specific range",
        "units": ["IU/mL", "U/mL"],
        "category": "Thyroid",
        "aliases": ["Anti-Thyroglobulin", "TgAb", "Thyroglobulin Ab", "Anti-Tg"],
    },
    {
        "name": "Total Bilirubin",
        "male_range": "5-13.6 µmol/L (0.29-0.8 mg/dL)",
        "female_range": "5-13.6 µmol/L (0.29-0.8 mg/dL)",
        "units": ["µmol/L", "umol/L", "mg/dL"],
        "category": "Liver Function",
        "aliases": ["Bilirubin", "Bilirubin Total", "T Bili"],
    },
    {
        "name": "Total Cholesterol",
        "male_range": "4.2-6.4 mmol/L (162-240 mg/dL)",
        "female_range": "4.2-6.4 mmol/L (162-240 mg/dL)",
        "units": ["mmol/L", "mg/dL"],
        "category": "Lipids",
        "aliases": [
            "Cholesterol", "Chol", "CHOL", "Cholesterol Total", "Total Chol", "Chol Total",
            "Serum Cholesterol", "Cholesterol Serum", "T-CHOL", "T-Chol", "T Chol",
            "Colesterol", "Colesterol Total", "Total Colesterol", "Cholestérol",
            "Cholestérol Total", "Cholesterin", "Gesamtcholesterin", "Colesterolo",
            "Colesterolo Totale",
        ],
    },
    {
        "name": "Total Protein",
        "male_range": "62-78 g/L (6.2-7.8 g/dL)",
        "female_range": "62-78 g/L (6.2-7.8 g/dL)",
        "units": ["g/L", "g/dL"],
        "category": "Protein",
        "aliases": ["Protein Total", "Serum Protein"],
    },
    {
        "name": "Transferrin Saturation %",
        "male_range": "20-35 %",
        "female_range": "20-35 %",
        "units": ["%"],
        "category": "Iron Studies",
        "aliases": ["Transferrin Saturation", "TSAT", "Iron Saturation", "Sat %"],
    },
    {
        "name": "Triglycerides",
        "male_range": "0.6-1.0 mmol/L (53-88.5 mg/dL)",
        "female_range": "0.6-1.0 mmol/L (53-88.5 mg/dL)",
        "units": ["mmol/L", "mg/dL"],
        "category": "Lipids",
        "aliases": ["Trig", "TG", "Triglyceride", "Triglycérides", "Triglyceridos", "TRIG"],
    },
    {
        "name": "Vitamin B12",
        "male_range": "350-650 pmol/L (474-880 pg/mL)",
        "female_range": "350-650 pmol/L (474-880 pg/mL)",
        "units": ["pmol/L", "pg/mL"],
        "category": "Vitamins",
        "aliases": [
            "B12", "B-12", "B 12", "Vitamin B-12", "Vitamin B 12", "B12 Vitamin",
            "B-12 Vitamin", "B 12 Vitamin", "VitB12", "Vit B12", "Vit B-12", "Vit B 12",
            "Cobalamin", "Cyanocobalamin", "Methylcobalamin", "Serum B12",
            "Serum Cobalamin", "Vitamina B12", "Vitamina B-12", "Vitamina B 12",
            "B12 Vitamina", "Cobalamina", "Vitamine B12", "B12 Vitamine",
        ],
    },
    {
        "name": "Vitamin D (25-Hydroxy D)",
        "male_range": "125-225 nmol/L (50-90 ng/mL)",
        "female_range": "125-225 nmol/L (50-90 ng/mL)",
        "units": ["nmol/L", "ng/mL"],
        "category": "Vitamins",
        "aliases": [
            "Vitamin D", "Vit D", "VitD", "Vit. D", "25-Hydroxy Vitamin D",
            "25-OH Vitamin D", "25(OH)D", "25 OH D", "25-OH-D", "Vitamin D 25-Hydroxy",
            "Vitamin D 25 Hydroxy", "Vitamin D, 25-Hydroxy", "25-Hydroxyvitamin D",
            "25 Hydroxyvitamin D", "25-OH-D3", "25-OH D3", "Calcidiol", "Cholecalciferol",
            "25-Hydroxycholecalciferol", "Serum Vitamin D", "Total Vitamin D",
            "Vitamin D Total", "D Vitamin", "D-Vitamin", "Vitamina D",
            "25-Hidroxi Vitamina D", "Vitamina D 25-Hidroxi", "D Vitamina", "Vitamine D",
            "25-Hydroxy Vitamine D", "D Vitamine", "25-Idrossi Vitamina D",
        ],
    },
    {
        "name": "WBC",
        "male_range": "5.5-7.5 ×10³/µL",
        "female_range": "5.5-7.5 ×10³/µL",
        "units": ["×10³/µL", "×10^3/µL", "K/µL", "K/uL"],
        "category": "White Blood Cells",
        "aliases": [
            "White Blood Cell Count", "WBC Count", "Leukocytes", "White Cell Count",
            "Leukocyte Count", "Total WBC",
        ],
    },
    {
        "name": "eGFR",
        "male_range": "> 90 mL/min/m² (> 60 if high muscle mass)",
        "female_range": "> 90 mL/min/m² (> 60 if high muscle mass)",
        "units": ["mL/min/m²", "mL/min/1.73m2"],
        "category": "Kidney Function",
        "aliases": [
            "Estimated GFR", "GFR", "Glomerular Filtration Rate", "eGFR (CKD-EPI)",
            "eGFR (MDRD)", "Estimated Glomerular Filtration Rate",
        ],
    },]

PRIMARY_BIOMARKERS = [b["name"] for b in DEFAULT_BENCHMARKS]

BIOMARKER_FULL_NAMES: Dict[str, str] = {
    # Liver
    "ALP": "Alkaline Phosphatase",
    "ALT": "Alanine Aminotransferase",
    "AST": "Aspartate Aminotransferase",
    "GGT": "Gamma-Glutamyl Transferase",
    # Kidney
    "BUN": "Blood Urea Nitrogen",
    "eGFR": "Estimated Glomerular Filtration Rate",
    # White cells (absolute counts)
    "WBC": "White Blood Cell Count",
    "Neutrophils": "Absolute Neutrophil Count",
    "Lymphocytes": "Absolute Lymphocyte Count",
    "Monocytes": "Absolute Monocyte Count",
    "Eosinophils": "Absolute Eosinophil Count",
    "Basophils": "Absolute Basophil Count",
    # Red cells
    "RBC": "Red Blood Cell Count",
    "HCT": "Hematocrit",
    "MCH": "Mean Corpuscular Hemoglobin",
    "MCHC": "Mean Corpuscular Hemoglobin Concentration",
    "MCV": "Mean Corpuscular Volume",
    "RDW": "Red Cell Distribution Width",
    # Lipids
    "HDL Cholesterol": "High-Density Lipoprotein Cholesterol",
    "LDL Cholesterol": "Low-Density Lipoprotein Cholesterol",
    "HbA1C": "Glycated Hemoglobin",
    # Thyroid
    "TSH": "Thyroid Stimulating Hormone",
    "TPO Antibodies": "Thyroid Peroxidase Antibodies",
    "SHBG": "Sex Hormone Binding Globulin",
    "TIBC": "Total Iron Binding Capacity",
    "LDH": "Lactate Dehydrogenase",
}

_KEY_STRIP = re.compile(r"[^a-z0-9]")


def match_key(name: str) -> str:
    """Lowercase alphanumerics only; the key used to line extracted names up with benchmarks."""
    return _KEY_STRIP.sub("", (name or "").lower().strip())


def full_name(name: str) -> Optional[str]:
    return BIOMARKER_FULL_NAMES.get(name)


def display_name(name: str) -> str:
    """Abbreviation plus expansion, e.g. TSH -> "TSH (Thyroid Stimulating Hormone)"."""
    expanded = full_name(name)
    if expanded and expanded != name:
        return f"{name} ({expanded})"
    return name


def default_benchmarks() -> List[Benchmark]:
    """Fresh copies of the catalogue entries, tagged as non-custom."""
    return [
        {
            **b,
            "units": list(b["units"]),
            "aliases": list(b["aliases"]),
            "id": f"default-{index}",
            "is_custom": False,
            "is_active": True,
        }
        for index, b in enumerate(DEFAULT_BENCHMARKS)
    ]


def find_default(name: str) -> Optional[Benchmark]:
    key = match_key(name)
    for b in DEFAULT_BENCHMARKS:
        if match_key(b["name"]) == key:
            return b
    return None


__all__ = [
    "DEFAULT_BENCHMARKS",
    "PRIMARY_BIOMARKERS",
    "BIOMARKER_FULL_NAMES",
    "match_key",
    "full_name",
    "display_name",
    "default_benchmarks",
    "find_default",
]
