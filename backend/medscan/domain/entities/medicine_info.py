"""
Medicine Info Entity

Descriptive record returned by the lookup collaborator for a selected
detection. The detection pipeline never inspects it.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any


@dataclass
class SideEffects:
    """Side effects grouped by severity."""

    common: List[str] = field(default_factory=list)
    serious: List[str] = field(default_factory=list)


@dataclass
class MedicineInfo:
    """
    Descriptive information about one medicine.

    Attributes:
        generic_name: Generic (or looked-up) name
        brand_names: Known brand names
        drug_class: Therapeutic class
        description: Free-text description
        common_uses: What the medicine is usually used for
        dosage_info: Dosage guidance
        side_effects: Common and serious side effects
        warnings: Warnings to show the user
        interactions: Known interactions
        general_safety: General safety note
        verified: False for degraded records built without a source
        sources: Links to the sources of the information
    """

    generic_name: str
    brand_names: List[str] = field(default_factory=list)
    drug_class: str = ""
    description: str = ""
    common_uses: str = ""
    dosage_info: str = ""
    side_effects: SideEffects = field(default_factory=SideEffects)
    warnings: List[str] = field(default_factory=list)
    interactions: List[str] = field(default_factory=list)
    general_safety: str = ""
    verified: bool = False
    sources: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generic_name": self.generic_name,
            "brand_names": list(self.brand_names),
            "drug_class": self.drug_class,
            "description": self.description,
            "common_uses": self.common_uses,
            "dosage_info": self.dosage_info,
            "side_effects": {
                "common": list(self.side_effects.common),
                "serious": list(self.side_effects.serious),
            },
            "warnings": list(self.warnings),
            "interactions": list(self.interactions),
            "general_safety": self.general_safety,
            "verified": self.verified,
            "sources": list(self.sources),
        }
