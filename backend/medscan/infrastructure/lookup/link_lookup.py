"""
Link-Based Medicine Lookup

Answers a selection event with a record pointing to public search pages.
No model call and no network access: the record is built instantly.
"""

from typing import List
from urllib.parse import quote
import logging

from ...domain.ports.medicine_lookup import MedicineLookupPort
from ...domain.entities.medicine_info import MedicineInfo, SideEffects


logger = logging.getLogger(__name__)


SEARCH_URL_TEMPLATES = (
    "https://www.google.com/search?q={query}",
    "https://www.1mg.com/search/all?name={name}",
    "https://www.drugs.com/search.php?searchterm={name}",
    "https://medlineplus.gov/search?q={name}",
)


def build_search_links(medicine_name: str) -> List[str]:
    """Build the search links for a trimmed medicine name."""
    name = quote(medicine_name, safe="")
    query = quote(f"{medicine_name} medicine", safe="")
    return [template.format(name=name, query=query) for template in SEARCH_URL_TEMPLATES]


class LinkMedicineLookup(MedicineLookupPort):
    """
    Lookup that defers the medical details to trusted search pages.

    Usage:
        lookup = LinkMedicineLookup()
        info = lookup.lookup("Dolo 650")
        info.sources  # Google, 1mg, Drugs.com and MedlinePlus links
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def lookup(self, medicine_name: str) -> MedicineInfo:
        clean_name = (medicine_name or "").strip()

        if not clean_name:
            self.logger.warning("Lookup requested for an empty medicine name")
            return MedicineInfo(
                generic_name="",
                description="No medicine name was provided.",
                general_safety="Always consult a doctor before use.",
                verified=False,
            )

        return MedicineInfo(
            generic_name=clean_name,
            brand_names=[clean_name],
            drug_class="Search Result",
            description=(
                "Verified details are available via the search links below. "
                "Open them to view full medical information on 1mg, Drugs.com or Google."
            ),
            common_uses="Open the links below to view uses.",
            dosage_info="Refer to the official packaging or the links.",
            side_effects=SideEffects(
                common=["See official label"],
                serious=["Consult a doctor"],
            ),
            warnings=["Verify details with a pharmacist."],
            interactions=["Check official sources."],
            general_safety="Always consult a doctor before use.",
            verified=True,
            sources=build_search_links(clean_name),
        )
