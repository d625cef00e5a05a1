"""
AllowMint Presale

Admission control and the public issuance entry points.
"""

from allowmint.presale.admission import AdmissionController
from allowmint.presale.gateway import IssuanceGateway

__all__ = [
    "AdmissionController",
    "IssuanceGateway",
]
