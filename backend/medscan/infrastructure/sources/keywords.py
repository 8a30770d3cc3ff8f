"""
Medicine Keywords

Common generic and brand medicine names matched against label text by the
keyword sources. All entries are lower case.
"""

from typing import Iterable, List


MEDICINE_KEYWORDS = (
    # Pain relievers
    "ibuprofen",
    "paracetamol",
    "acetaminophen",
    "aspirin",
    "naproxen",
    "diclofenac",
    "tramadol",
    "codeine",
    "morphine",
    # Antibiotics
    "amoxicillin",
    "azithromycin",
    "ciprofloxacin",
    "doxycycline",
    "penicillin",
    "cephalexin",
    "metronidazole",
    "clindamycin",
    # Cardiovascular
    "metformin",
    "lisinopril",
    "atorvastatin",
    "amlodipine",
    "simvastatin",
    "losartan",
    "hydrochlorothiazide",
    "metoprolol",
    "carvedilol",
    "warfarin",
    "clopidogrel",
    # Gastrointestinal
    "omeprazole",
    "pantoprazole",
    "ranitidine",
    "famotidine",
    "lansoprazole",
    "esomeprazole",
    # Thyroid
    "levothyroxine",
    "synthroid",
    # Neurological
    "gabapentin",
    "pregabalin",
    "sertraline",
    "fluoxetine",
    "escitalopram",
    "duloxetine",
    "venlafaxine",
    "alprazolam",
    "lorazepam",
    "diazepam",
    # Steroids
    "prednisone",
    "prednisolone",
    "dexamethasone",
    "hydrocortisone",
    # Allergy
    "cetirizine",
    "loratadine",
    "diphenhydramine",
    "fexofenadine",
    "montelukast",
    # Diabetes
    "insulin",
    "glipizide",
    "glyburide",
    "sitagliptin",
    # Others
    "albuterol",
    "fluticasone",
    "salbutamol",
    "amitriptyline",
    "cyclobenzaprine",
)


def find_keywords(text: str, keywords: Iterable[str] = MEDICINE_KEYWORDS) -> List[str]:
    """
    Find known medicine names contained in a text.

    Matching is a case-insensitive substring test, so "Amoxicillin500mg"
    still yields "amoxicillin".

    Returns:
        Matched keywords in keyword-list order, each at most once
    """
    lowered = text.lower()
    return [keyword for keyword in keywords if keyword in lowered]
