"""
Medicine Lookup Port

Abstract interface for turning a selected detection name into descriptive
information.
"""

from abc import ABC, abstractmethod

from ..entities.medicine_info import MedicineInfo


class MedicineLookupPort(ABC):
    """
    Port (interface) for the descriptive lookup collaborator.

    Stateless request/response: one name in, one record out. When its own
    backend is unavailable an implementation returns a degraded record with
    ``verified=False`` instead of raising.
    """

    @abstractmethod
    def lookup(self, medicine_name: str) -> MedicineInfo:
        """
        Get descriptive information for a medicine.

        Args:
            medicine_name: Name as shown on the selected detection

        Returns:
            MedicineInfo record
        """
        pass
