"""Persistance YAML: configuration fiscale et surcharges d'obligations."""

from fiscalfr.stockage.config import (
    charger_config,
    mettre_a_jour_config,
    obtenir_ou_creer_config,
    sauvegarder_config,
)
from fiscalfr.stockage.service import (
    obtenir_obligations_annee,
    obtenir_obligations_plage,
)
from fiscalfr.stockage.surcharges import RegistreSurcharges, Surcharge

__all__ = [
    "RegistreSurcharges",
    "Surcharge",
    "charger_config",
    "mettre_a_jour_config",
    "obtenir_obligations_annee",
    "obtenir_obligations_plage",
    "obtenir_ou_creer_config",
    "sauvegarder_config",
]
