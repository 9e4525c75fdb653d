"""Module echeances: jours ouvres, generation des obligations fiscales et calendrier.

Fournit le calcul des jours ouvres (jours feries fixes), la generation
des obligations TVA / liasse / CFE par annee civile, et la vue calendrier
avec alertes.
"""

from fiscalfr.echeances.calendrier import (
    AlerteObligation,
    EvenementCalendrier,
    evenements_du_mois,
    formater_rappels_cli,
    obligations_de_l_annee,
    obtenir_alertes,
)
from fiscalfr.echeances.generateur import (
    FAMILLES_COMMUNES,
    GENERATEURS_TVA,
    generer_obligations,
    generer_obligations_pluriannuelles,
)
from fiscalfr.echeances.jours_ouvres import (
    ajuster_jour_ouvrable,
    est_jour_ferie,
    est_jour_ouvrable,
    est_weekend,
    jour_ouvrable_suivant,
    nieme_jour_ouvrable_apres,
    nieme_jour_ouvrable_du_mois,
)
from fiscalfr.echeances.modeles import (
    ConfigEntreprise,
    Obligation,
    RegimeTva,
    ResultatObligations,
    StatutObligation,
    TypeObligation,
)

__all__ = [
    "AlerteObligation",
    "ConfigEntreprise",
    "EvenementCalendrier",
    "FAMILLES_COMMUNES",
    "GENERATEURS_TVA",
    "Obligation",
    "RegimeTva",
    "ResultatObligations",
    "StatutObligation",
    "TypeObligation",
    "ajuster_jour_ouvrable",
    "est_jour_ferie",
    "est_jour_ouvrable",
    "est_weekend",
    "evenements_du_mois",
    "formater_rappels_cli",
    "generer_obligations",
    "generer_obligations_pluriannuelles",
    "jour_ouvrable_suivant",
    "nieme_jour_ouvrable_apres",
    "nieme_jour_ouvrable_du_mois",
    "obligations_de_l_annee",
    "obtenir_alertes",
]
