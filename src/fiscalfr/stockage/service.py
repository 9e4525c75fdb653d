"""Obligations fiscales fusionnees avec les surcharges utilisateur.

Combine le generateur pur avec la configuration et le registre YAML.
"""

from __future__ import annotations

import datetime
from pathlib import Path
from typing import Optional

from fiscalfr.echeances.generateur import (
    generer_obligations,
    generer_obligations_pluriannuelles,
)
from fiscalfr.echeances.modeles import ResultatObligations
from fiscalfr.stockage.config import CHEMIN_CONFIG_DEFAUT, obtenir_ou_creer_config
from fiscalfr.stockage.surcharges import CHEMIN_SURCHARGES_DEFAUT, RegistreSurcharges


def obtenir_obligations_annee(
    annee: int,
    chemin_config: Path = CHEMIN_CONFIG_DEFAUT,
    chemin_surcharges: Path = CHEMIN_SURCHARGES_DEFAUT,
    aujourd_hui: Optional[datetime.date] = None,
) -> ResultatObligations:
    """Obligations d'une annee civile avec les surcharges (statut, montant) fusionnees."""
    config = obtenir_ou_creer_config(chemin_config)
    resultat = generer_obligations(annee, config, aujourd_hui)
    return RegistreSurcharges(Path(chemin_surcharges)).appliquer(resultat)


def obtenir_obligations_plage(
    de: int,
    a: int,
    chemin_config: Path = CHEMIN_CONFIG_DEFAUT,
    chemin_surcharges: Path = CHEMIN_SURCHARGES_DEFAUT,
    aujourd_hui: Optional[datetime.date] = None,
) -> list[ResultatObligations]:
    """Obligations de chaque annee de [de, a]; les surcharges sont lues une seule fois.

    Raises:
        ValueError: Si de > a.
    """
    config = obtenir_ou_creer_config(chemin_config)
    resultats = generer_obligations_pluriannuelles(de, a, config, aujourd_hui)
    registre = RegistreSurcharges(Path(chemin_surcharges))
    return [registre.appliquer(r) for r in resultats]
